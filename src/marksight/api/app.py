"""FastAPI application for the marksight local JSON API."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..core.errors import GrammarUnavailableError, UnknownFeatureError
from ..core.model import Highlight, OutlineEntry
from ..core.rules import MARKDOWN_FEATURES


class HighlightRequest(BaseModel):
    text: str
    features: list[str] | None = None


class OutlineRequest(BaseModel):
    text: str


def highlight_to_dict(h: Highlight) -> dict[str, Any]:
    return {
        "start": h.span.start,
        "end": h.span.end,
        "category": h.category,
        "feature": h.feature,
    }


def entry_to_dict(e: OutlineEntry) -> dict[str, Any]:
    return {"name": e.name, "start": e.span.start, "end": e.span.end, "depth": e.depth}


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance (parser, engine, config)
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Marksight API",
        description="Highlight and outline Markdown documents",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        return {"status": "ok", "version": __version__}

    @app.get("/features")
    async def features(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """List declared features and which are enabled by default."""
        enabled = runtime.engine.enabled
        return {
            "features": [
                {"name": f.name, "override": f.override, "enabled": f.name in enabled}
                for f in MARKDOWN_FEATURES
            ]
        }

    @app.post("/highlight")
    async def highlight(req: HighlightRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        try:
            highlights = runtime.highlight(req.text, req.features)
        except UnknownFeatureError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except GrammarUnavailableError as e:
            raise HTTPException(status_code=503, detail=f"Feature unavailable: {e}") from e
        return {"highlights": [highlight_to_dict(h) for h in highlights]}

    @app.post("/outline")
    async def outline(req: OutlineRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        try:
            result = runtime.outline(req.text)
        except GrammarUnavailableError as e:
            raise HTTPException(status_code=503, detail=f"Feature unavailable: {e}") from e
        return {"group": result.group, "entries": [entry_to_dict(e) for e in result.entries]}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
