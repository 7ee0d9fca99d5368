"""FastAPI application factory."""

import base64
import binascii
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config.settings import settings
from src.advisor import SalesPitchAdvisor
from src.api.routes import router
from src.calculators.rebate_data import validate_tiers
from src.llm.gateway import LLMGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: check the tier table, build the pitch advisor."""
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting up...")

    validate_tiers()
    app.state.advisor = SalesPitchAdvisor(LLMGateway())

    yield

    logger.info("Shutting down...")


def _unauthorized() -> Response:
    return Response(
        content="Unauthorized",
        status_code=401,
        headers={"WWW-Authenticate": "Basic"},
    )


def _parse_basic_auth(header: str | None) -> tuple[str, str] | None:
    """Return (username, password) from a Basic Authorization header, or None."""
    if not header or not header.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(header[6:], validate=True).decode()
    except (binascii.Error, UnicodeDecodeError):
        return None
    if ":" not in decoded:
        return None
    username, password = decoded.split(":", 1)
    return username, password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Require the planner credentials from settings on every request."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        credentials = _parse_basic_auth(request.headers.get("Authorization"))
        if credentials is None:
            return _unauthorized()

        username, password = credentials
        user_ok = secrets.compare_digest(username.encode(), settings.auth_username.encode())
        pass_ok = secrets.compare_digest(password.encode(), settings.auth_password.encode())
        if not (user_ok and pass_ok):
            logger.warning("Rejected credentials for user=%s path=%s", username, request.url.path)
            return _unauthorized()
        return await call_next(request)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Premium Rebate Planner", lifespan=lifespan)
    app.add_middleware(BasicAuthMiddleware)
    app.include_router(router)
    return app
