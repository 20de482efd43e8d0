from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pessoas.api.v1 import health, pessoas
from pessoas.core.config import HOST, settings
from pessoas.core.db import build_engine
from pessoas.core.errors import PessoasException
from pessoas.core.logging_config import get_logger, setup_logging
from pessoas.core.migrations import run_migrations

logger = get_logger(__name__)


def create_app(engine: Optional[Engine] = None, run_migrations_on_startup: bool = True) -> FastAPI:
    """
    build the http front door around a connection pool

    the engine is the only shared state; handlers reach it through
    app.state, so tests can pass a substitute store
    """
    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.engine = engine if engine is not None else build_engine()

    if run_migrations_on_startup:
        @app.on_event("startup")
        def on_startup():
            # raising here stops uvicorn before it binds the socket
            run_migrations(app.state.engine)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()

    @app.exception_handler(PessoasException)
    def handle_pessoas_exception(request: Request, exc: PessoasException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
        return Response(status_code=exc.status_code)

    @app.exception_handler(SQLAlchemyError)
    def handle_store_error(request: Request, exc: SQLAlchemyError):
        # pool timeouts, lost connections and unexpected statement failures
        logger.error(f"{request.method} {request.url.path} store fault: {exc}", exc_info=exc)
        return Response(status_code=500)

    app.include_router(pessoas.router, tags=["pessoas"])
    app.include_router(health.router, prefix="/health", tags=["health"])
    return app


def run():
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    app = create_app()
    logger.info(f"will listen on {HOST}:{settings.PORT}")
    uvicorn.run(app, host=HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
