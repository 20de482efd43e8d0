import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlmodel import SQLModel, create_engine
from sqlmodel.pool import StaticPool

import pessoas.models  # noqa: F401
from pessoas.main import create_app

# in-memory sqlite stands in for postgres; one shared connection across threads
@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _case_sensitive_like(dbapi_connection, connection_record):
        # postgres LIKE is case-sensitive, sqlite only is with this pragma
        dbapi_connection.execute("PRAGMA case_sensitive_like=ON")

    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture(name="client")
def client_fixture(engine):
    app = create_app(engine=engine, run_migrations_on_startup=False)
    yield TestClient(app)

@pytest.fixture(name="zeca")
def zeca_fixture():
    return {"apelido": "zeca", "nome": "Jose", "nascimento": "1990-01-01", "stack": ["go", "sql"]}
