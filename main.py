import logging
import sys

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from routes.tutor_routes import router as tutor_router
from services.container import get_quiz_store
from utils import config
from utils.exceptions import TutorError

# Configure logging
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)

# FastAPI App
app = FastAPI(title="Code-a-palooza Tutor API", version="1.0.0")


def _error_body(error_code: str, message: str, status_code: int, **extra) -> dict:
    body = {"error": error_code, "message": message, "status_code": status_code}
    body.update(extra)
    return body


@app.exception_handler(TutorError)
async def tutor_error_handler(request: Request, exc: TutorError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message} {exc.context}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, exc.status_code),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    try:
        detail = jsonable_encoder(exc.errors())
    except UnicodeDecodeError:
        detail = [
            {
                "loc": ["body"],
                "msg": "Binary data cannot be properly decoded as UTF-8",
                "type": "binary_data_error",
            }
        ]
    logger.warning(f"{request.method} {request.url.path} -> 400 invalid request body")
    return JSONResponse(
        status_code=400,
        content=_error_body("INVALID_REQUEST", "Invalid input data", 400, detail=detail),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_ERROR", "Internal Server Error", 500),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tutor_router)


@app.get("/")
async def root():
    return {"greeting": "Hello!", "message": "Welcome to Code-a-palooza!"}


@app.get("/health")
async def health():
    return {"status": "ok", "quiz_store": get_quiz_store().backend_name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
