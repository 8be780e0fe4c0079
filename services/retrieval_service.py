import asyncio
import logging
from typing import Any, Dict, List, Optional

import clients.pinecone_client as pinecone_client

logger = logging.getLogger(__name__)


class PineconeVectorIndex:
    """Async view of the blocking Pinecone query"""

    def __init__(self, index_name: Optional[str] = None, namespace: Optional[str] = None):
        self.index_name = index_name
        self.namespace = namespace

    async def query(self, vector: List[float], top_k: int) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(
            pinecone_client.query_index,
            vector,
            top_k,
            self.index_name,
            self.namespace,
        )


class RetrievalService:
    """
    Embeds a query and returns the text of its nearest neighbours.

    embedder:     object with `async embed(text) -> List[float]`
    vector_index: object with `async query(vector, top_k) -> List[hit dict]`
    """

    def __init__(self, embedder, vector_index):
        self.embedder = embedder
        self.vector_index = vector_index

    async def search(self, text: str, top_k: int) -> List[Dict[str, Any]]:
        vector = await self.embedder.embed(text)
        hits = await self.vector_index.query(vector, top_k)
        logger.info(f"Retrieved {len(hits)} matches (top_k={top_k})")
        return hits

    async def snippets(self, text: str, top_k: int, missing: str = "No content") -> List[str]:
        """Matched `content` metadata, with `missing` standing in for hits that carry none."""
        hits = await self.search(text, top_k)
        return [(hit.get("metadata") or {}).get("content") or missing for hit in hits]
