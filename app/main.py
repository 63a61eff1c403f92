"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import pages
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.errors import StoreError
from app.middleware.route_guard import RouteGuardMiddleware

logger = logging.getLogger(__name__)

app = FastAPI(
    title="WC Check API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RouteGuardMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    """Store failures are fatal for the request; details are already logged."""
    logger.error(
        "Request failed on credential store",
        extra={"path": request.url.path, "operation": exc.operation},
    )
    return JSONResponse(status_code=503, content={"detail": exc.message})


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(pages.router)
