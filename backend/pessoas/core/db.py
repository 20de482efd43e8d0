from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from pessoas.core.config import POOL_MAX_SIZE, POOL_TIMEOUT_SECONDS, settings


def build_engine(url=None, **kwargs) -> Engine:
    """
    create the pooled engine shared by every request

    connections are opened lazily up to POOL_MAX_SIZE, never beyond it.
    returned connections are not reset or pinged ("fast" recycling), the
    session already commits or rolls back before handing them back
    """
    options = dict(
        pool_size=POOL_MAX_SIZE,
        max_overflow=0,
        pool_timeout=POOL_TIMEOUT_SECONDS,
        pool_reset_on_return=None,
        pool_pre_ping=False,
    )
    options.update(kwargs)
    return create_engine(url or settings.database_url(), **options)


def get_session(request: Request) -> Iterator[Session]:
    """borrow a connection from the app's pool for the lifetime of one request"""
    with Session(request.app.state.engine) as session:
        yield session
