from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging
import sys

from api import orders
from constants import ApiConfig, ServerConfig
from init_db import init_database
from utils.error_handlers import http_exception_handler, request_validation_handler
from utils.logging_utils import (
    configure_logging,
    set_logging_context,
    clear_logging_context,
    new_request_id,
)

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info("Starting Order Service")
    init_database()
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title=ApiConfig.TITLE,
    description="Create, retrieve and advance customer orders",
    version=ApiConfig.VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its request id."""
    request_id = new_request_id(request.headers.get(ApiConfig.REQUEST_ID_HEADER))
    set_logging_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        clear_logging_context()
    response.headers[ApiConfig.REQUEST_ID_HEADER] = request_id
    return response


# Include API routers
app.include_router(orders.router, prefix=ApiConfig.PREFIX, tags=["orders"])


@app.get("/api/health")
def health_check():
    """Liveness probe"""
    return {"status": "ok", "version": ApiConfig.VERSION}


@app.get("/")
def root():
    """Root endpoint - API only mode"""
    return {
        "message": ApiConfig.TITLE,
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn
    import socket

    # Check if port is available
    def is_port_in_use(host: str, port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((host, port))
                return False
            except OSError:
                return True

    if is_port_in_use(ServerConfig.HOST, ServerConfig.PORT):
        logger.error(f"Port {ServerConfig.PORT} is already in use!")
        logger.error("Another instance of Order Service may be running.")
        sys.exit(1)

    logger.info(f"Starting Order Service on {ServerConfig.url()}...")
    uvicorn.run(app, host=ServerConfig.HOST, port=ServerConfig.PORT)
