"""
Wordbook API Server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from wordbook.core.config import Settings, configure_logging, load_settings
from wordbook.core.dictionary import DictionaryService
from wordbook.core.errors import (
    InvalidQuery,
    VocabularyStoreCorrupt,
    VocabularyStoreUnavailable,
)
from wordbook.core.vocabulary import VocabularyStore
from wordbook.server.deps import build_dictionary, build_vocabulary
from wordbook.server.routes import lookup, shards, ws
from wordbook.server.routes import vocabulary as vocabulary_routes


logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def log_routes(app: FastAPI):
    routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ", ".join(route.methods - {"HEAD", "OPTIONS"})
            routes.append((methods, route.path, route.name))

    routes.sort(key=lambda r: (r[1], r[0]))

    for methods, path, name in routes:
        logger.info("  %-8s %-40s → %s", methods, path, name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_routes(app)
    try:
        app.state.vocabulary.load()
    except (VocabularyStoreCorrupt, VocabularyStoreUnavailable) as e:
        logger.warning("saved words unavailable at startup: %s", e)
    yield


def create_app(
    settings: Settings | None = None,
    dictionary: DictionaryService | None = None,
    vocabulary: VocabularyStore | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="Wordbook API", version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.dictionary = dictionary or build_dictionary(settings)
    app.state.vocabulary = vocabulary or build_vocabulary(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(lookup.router)
    app.include_router(vocabulary_routes.router)
    app.include_router(shards.router)
    app.include_router(ws.router)

    @app.exception_handler(InvalidQuery)
    async def invalid_query(request: Request, exc: InvalidQuery):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(VocabularyStoreUnavailable)
    async def vocabulary_unavailable(request: Request, exc: VocabularyStoreUnavailable):
        logger.warning("%s", exc)
        return JSONResponse(status_code=503, content={"detail": "saved words temporarily unavailable"})

    @app.exception_handler(VocabularyStoreCorrupt)
    async def vocabulary_corrupt(request: Request, exc: VocabularyStoreCorrupt):
        return JSONResponse(
            status_code=503,
            content={"detail": "saved words temporarily unavailable", "warning": str(exc)},
        )

    @app.get("/")
    async def root():
        return {"name": "Wordbook API", "version": VERSION}

    return app


def build_app() -> FastAPI:
    """Factory for uvicorn: uvicorn wordbook.server.main:build_app --factory"""
    settings = load_settings()
    configure_logging(settings.log_level)
    return create_app(settings)
