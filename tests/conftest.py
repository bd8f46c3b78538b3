"""Configuração do pytest para a API de Produtos."""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from src.config import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'produtos.db'}")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def produto_payload() -> dict:
    return {
        "nome": "Mouse",
        "quantidade": 5,
        "preco": 29.9,
        "imagem": "http://x/m.png",
    }
