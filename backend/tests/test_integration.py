import uuid

import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from pessoas.main import create_app


def _created_id(response):
    location = response.headers["location"]
    assert location.startswith("/pessoas/")
    return location.rsplit("/", 1)[1]


def test_create_then_get(client, zeca):
    """created person reads back with exactly the submitted fields"""
    response = client.post("/pessoas", json=zeca)
    assert response.status_code == 201
    assert response.content == b""

    person_id = _created_id(response)
    assert str(uuid.UUID(person_id)) == person_id

    response = client.get(f"/pessoas/{person_id}")
    assert response.status_code == 200
    assert response.json() == {"id": person_id, **zeca}


def test_get_never_exposes_search_field(client, zeca):
    person_id = _created_id(client.post("/pessoas", json=zeca))
    body = client.get(f"/pessoas/{person_id}").json()
    assert "for_search" not in body


def test_create_without_stack_renders_null(client):
    payload = {"apelido": "ana", "nome": "Ana", "nascimento": "1985-05-20"}
    person_id = _created_id(client.post("/pessoas", json=payload))

    body = client.get(f"/pessoas/{person_id}").json()
    assert body["stack"] is None


def test_stack_order_is_preserved(client):
    payload = {"apelido": "b", "nome": "B", "nascimento": "2000-02-29", "stack": ["sql", "go", "sql"]}
    person_id = _created_id(client.post("/pessoas", json=payload))
    assert client.get(f"/pessoas/{person_id}").json()["stack"] == ["sql", "go", "sql"]


def test_duplicate_apelido_rejected(client, zeca):
    assert client.post("/pessoas", json=zeca).status_code == 201

    other = {**zeca, "nome": "Outro Jose"}
    response = client.post("/pessoas", json=other)
    assert response.status_code == 422
    assert client.get("/contagem-pessoas").text == "1"


@pytest.mark.parametrize("payload", [
    {"nome": "Jose", "nascimento": "1990-01-01"},
    {"apelido": "zeca", "nome": "Jose", "nascimento": "01/01/1990"},
    {"apelido": "zeca", "nome": "Jose", "nascimento": "1990-02-30"},
    {"apelido": "zeca", "nome": 1, "nascimento": "1990-01-01"},
    {"apelido": None, "nome": "Jose", "nascimento": "1990-01-01"},
    {"apelido": "zeca", "nome": "Jose", "nascimento": "1990-01-01", "stack": ["go", 1]},
    {"apelido": "zeca", "nome": "Jose", "nascimento": "1990-01-01", "stack": "go"},
])
def test_invalid_payload_creates_nothing(client, payload):
    before = client.get("/contagem-pessoas").text

    response = client.post("/pessoas", json=payload)
    assert response.status_code == 422
    assert client.get("/contagem-pessoas").text == before


def test_malformed_json_body(client):
    response = client.post(
        "/pessoas",
        content=b'{"apelido": "zeca",',
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 422


def test_get_unknown_id(client):
    response = client.get(f"/pessoas/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.content == b""


def test_get_unparseable_id_is_internal_fault(client):
    """malformed ids keep the 500 existing clients observe"""
    response = client.get("/pessoas/not-a-uuid")
    assert response.status_code == 500


def test_search_matches_substrings(client, zeca):
    person_id = _created_id(client.post("/pessoas", json=zeca))
    client.post("/pessoas", json={"apelido": "maria", "nome": "Maria", "nascimento": "1970-03-03", "stack": ["python"]})

    for term in ("zec", "Jose", "sql"):
        response = client.get("/pessoas", params={"t": term})
        assert response.status_code == 200
        results = response.json()
        assert [p["id"] for p in results] == [person_id]
        assert results[0] == {"id": person_id, **zeca}

    assert client.get("/pessoas", params={"t": "python"}).json()[0]["apelido"] == "maria"
    assert client.get("/pessoas", params={"t": "rust"}).json() == []


def test_search_empty_or_missing_term_returns_everything(client, zeca):
    client.post("/pessoas", json=zeca)
    client.post("/pessoas", json={"apelido": "maria", "nome": "Maria", "nascimento": "1970-03-03"})

    assert len(client.get("/pessoas", params={"t": ""}).json()) == 2
    assert len(client.get("/pessoas").json()) == 2


def test_count_increments_per_create(client):
    response = client.get("/contagem-pessoas")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "0"

    for n in range(1, 4):
        client.post("/pessoas", json={"apelido": f"p{n}", "nome": "P", "nascimento": "1999-09-09"})
        assert client.get("/contagem-pessoas").text == str(n)


def test_store_fault_is_internal_error(zeca):
    """an engine without the schema makes every statement fail"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    client = TestClient(create_app(engine=engine, run_migrations_on_startup=False))

    assert client.post("/pessoas", json=zeca).status_code == 500
    assert client.get(f"/pessoas/{uuid.uuid4()}").status_code == 500
    assert client.get("/pessoas", params={"t": "x"}).status_code == 500
    assert client.get("/contagem-pessoas").status_code == 500


def test_health_check(client):
    response = client.get("/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_check(client):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"]["status"] == "healthy"


def test_invalid_utf8_body(client):
    before = client.get("/contagem-pessoas").text

    response = client.post(
        "/pessoas",
        content=b'{"apelido": "\xff\xfe", "nome": "Jose", "nascimento": "1990-01-01"}',
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 422
    assert client.get("/contagem-pessoas").text == before


def test_create_accepts_json_regardless_of_content_type(client):
    response = client.post(
        "/pessoas",
        content=b'{"apelido": "zeca", "nome": "Jose", "nascimento": "1990-01-01"}',
        headers={"content-type": "text/plain"},
    )
    assert response.status_code == 201


def test_search_is_case_sensitive(client, zeca):
    client.post("/pessoas", json=zeca)

    assert client.get("/pessoas", params={"t": "ZECA"}).json() == []
    assert client.get("/pessoas", params={"t": "jose"}).json() == []
    assert len(client.get("/pessoas", params={"t": "zeca"}).json()) == 1


def test_readiness_check_store_unreachable(tmp_path):
    """readiness reports 503 when no connection can be opened"""
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'pessoas.db'}")
    client = TestClient(create_app(engine=engine, run_migrations_on_startup=False))

    response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["database"]["status"] == "unhealthy"
