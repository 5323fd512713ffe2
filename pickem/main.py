"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pickem import __version__
from pickem.core.config import get_settings
from pickem.database import Database

from pickem.controllers.health_controller import router as health_router
from pickem.controllers.leaderboard_controller import router as leaderboard_router
from pickem.controllers.scoring_controller import router as scoring_router


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    yield
    await Database.disconnect()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Pick'em Scoring API",
        description="Scoring contra el spread y leaderboards semanales, de temporada y best finish",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
    )

    # Agrego los routers de los controllers al app
    app.include_router(health_router)
    app.include_router(leaderboard_router)
    app.include_router(scoring_router)

    @app.get("/")
    async def root():
        # Endpoint raíz, sirve para verificar que la API está levantada
        return {
            "name": "Pick'em Scoring API",
            "version": __version__,
            "docs": "/docs"
        }

    return app
