import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pinecone import Pinecone

from utils import config
from utils.exceptions import UpstreamError

# Set up logging
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pinecone() -> Pinecone:
    """Initialize the Pinecone client on first use."""
    if not config.PINECONE_API_KEY:
        logger.warning("PINECONE_API_KEY not found in environment variables")
    pc = Pinecone(api_key=config.PINECONE_API_KEY)
    logger.info("Initialized Pinecone client")
    return pc


def query_index(
    query_emb: List[float],
    top_k: int,
    index_name: Optional[str] = None,
    namespace: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Top-K nearest-neighbour query against the tutor material index.

    Args:
        query_emb: Dense query embedding.
        top_k: Number of matches to return.
        index_name: Pinecone index (default: PINECONE_INDEX_NAME setting).
        namespace: Index namespace (default: PINECONE_NAMESPACE setting).

    Returns:
        List of hits as dicts with id, score and metadata, best first.

    Raises:
        UpstreamError if the query fails.
    """
    index_name = index_name or config.PINECONE_INDEX_NAME
    namespace = namespace or config.PINECONE_NAMESPACE

    try:
        index = get_pinecone().Index(index_name)
        results = index.query(
            vector=query_emb,
            top_k=top_k,
            namespace=namespace,
            include_metadata=True,
        )
    except Exception as e:
        logger.error(f"Pinecone query on {index_name}/{namespace} failed: {e}")
        raise UpstreamError(
            "pinecone",
            "Vector index query failed",
            context={"index": index_name, "namespace": namespace},
        ) from e

    hits = [
        {"id": match.id, "score": match.score, "metadata": match.metadata or {}}
        for match in (results.matches or [])
    ]
    logger.info(f"Pinecone query on {index_name}/{namespace} returned {len(hits)} matches")
    return hits
