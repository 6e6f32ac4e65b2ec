"""
FastAPI application factory for Vision Overlay.

Routes:
- /api/* -> REST API over the presenter
"""

from __future__ import annotations

import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runtime.presenter import Presenter
from .routes import api


def create_app(presenter: Presenter) -> FastAPI:
    """Create the FastAPI app bound to one presenter instance."""
    app = FastAPI(
        title="Vision Overlay",
        version="0.1.0",
        description="Photo capture, object detection and overlay geometry service",
    )

    # CORS for development (frontend dev server)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.presenter = presenter
    app.state.start_time = time.time()

    app.include_router(api.router, prefix="/api")

    return app
