"""
Main application entry point for the QuizMe backend.

Usage:
    - Direct: python -m quizme.main
    - ASGI server: uvicorn quizme.main:app
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from quizme import __version__
from quizme.api import main_router, register_exception_handlers, register_module
from quizme.common.logger import app_logger, configure_logger
from quizme.config import Settings, get_settings
from quizme.controllers import attempts, explanations, quizzes
from quizme.database.init_db import close_database, get_session_factory, initialize_database
from quizme.domain.explanations import (
    ExplanationService,
    ExplanationServiceConfig,
    OpenAIExplanationService,
)
from quizme.storage import DocumentStore, MemoryDocumentStore, SqlDocumentStore

logger = app_logger.getChild("main")

register_module("quizzes", quizzes.router, prefix="/quizzes")
register_module("attempts", attempts.router, prefix="/attempts")
register_module("explanations", explanations.router, prefix="/ai")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the document store on startup and release resources on shutdown.

    A store handed to ``create_app`` is used as is and left open.
    """
    settings: Settings = app.state.settings
    logger.info("Application startup sequence initiated.")

    owns_store = app.state.store is None
    if owns_store:
        if settings.STORE_BACKEND == "memory":
            app.state.store = MemoryDocumentStore()
            logger.info("Using in-memory document store")
        else:
            await initialize_database(
                database_url=settings.DATABASE_URL,
                echo=settings.SQL_ECHO,
                pool_size=settings.DB_POOL_SIZE,
            )
            app.state.store = SqlDocumentStore(get_session_factory())

    logger.info("Application startup complete")
    yield

    logger.info("Application shutdown sequence initiated.")
    await app.state.explanation_service.close()
    if owns_store:
        await app.state.store.close()
        if settings.STORE_BACKEND == "sql":
            await close_database()
        app.state.store = None
    logger.info("Application shutdown complete")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    explanation_service: Optional[ExplanationService] = None
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Settings to use instead of the environment
        store: Document store to use instead of the configured backend
        explanation_service: Explanation service to use instead of OpenAI

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logger(
        level=settings.LOG_LEVEL,
        use_json=settings.LOG_JSON,
        log_file=settings.LOG_FILE,
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Quiz authoring, attempts, reviews and AI explanations",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store
    app.state.explanation_service = explanation_service or OpenAIExplanationService(
        ExplanationServiceConfig.from_settings(settings)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(main_router, prefix=settings.API_PREFIX)
    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Health check."""
        return "Quiz Backend is Running!"

    logger.info(f"Application created with {len(app.routes)} routes")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quizme.main:app", host="0.0.0.0", port=8000)
