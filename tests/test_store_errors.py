"""Falhas do banco viram 500 com mensagem genérica."""

import logging

import pytest

from src.database import Base


@pytest.fixture
def broken_client(client, app):
    # Sem a tabela, qualquer comando falha no banco
    Base.metadata.drop_all(bind=app.state.engine)
    return client


@pytest.mark.parametrize(
    "method, path, message",
    [
        ("get", "/api/produto", "Error fetching data"),
        ("get", "/api/produto/1", "Error fetching data"),
        ("delete", "/api/produto/1", "Error deleting data"),
    ],
)
def test_store_error_without_body(broken_client, method, path, message):
    response = getattr(broken_client, method)(path)

    assert response.status_code == 500
    assert response.json() == {"message": message}


def test_create_store_error(broken_client, produto_payload):
    response = broken_client.post("/api/produto", json=produto_payload)

    assert response.status_code == 500
    assert response.json() == {"message": "Error inserting data"}


def test_update_store_error(broken_client, produto_payload):
    response = broken_client.put("/api/produto/1", json=produto_payload)

    assert response.status_code == 500
    assert response.json() == {"message": "Error updating data"}


def test_store_error_detail_is_logged_not_returned(broken_client, caplog):
    with caplog.at_level(logging.ERROR):
        response = broken_client.get("/api/produto")

    assert response.json() == {"message": "Error fetching data"}
    assert "no such table" not in response.text
    assert any("Error fetching data" in record.getMessage() for record in caplog.records)
    assert any("no such table" in record.getMessage() for record in caplog.records)


def test_connections_return_to_pool_after_failures(broken_client, app, produto_payload):
    # Mais requisições com falha do que o pool comporta
    for _ in range(30):
        assert broken_client.get("/api/produto").status_code == 500
        assert broken_client.post("/api/produto", json=produto_payload).status_code == 500

    assert app.state.engine.pool.checkedout() == 0


def test_connections_return_to_pool_after_success(client, app, produto_payload):
    for _ in range(15):
        produto_id = client.post("/api/produto", json=produto_payload).json()["id"]
        client.get(f"/api/produto/{produto_id}")
        client.delete(f"/api/produto/{produto_id}")

    assert app.state.engine.pool.checkedout() == 0
