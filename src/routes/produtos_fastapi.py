# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Produtos.

Cada rota executa um único comando SQL. Erros do banco viram 500 com
mensagem genérica; o detalhe fica apenas no log do servidor.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from src.config import Settings
from src.database import get_db
from src.models.produto import Produto
from src.schemas.produto import MessageResponse, ProdutoCreated, ProdutoPayload, ProdutoRead

INCOMPLETE_DATA_MESSAGE = "incomplete data, provide nome, quantidade, preco and imagem."
NOT_FOUND_MESSAGE = "Produto not found"
REQUIRED_FIELDS = ("nome", "quantidade", "preco", "imagem")
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# O sqlite3 levanta OverflowError (fora do SQLAlchemy) para inteiros grandes demais
STORE_ERRORS = (SQLAlchemyError, OverflowError)

# Corpo aceito em JSON ou formulário
PAYLOAD_OPENAPI = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": ProdutoPayload.model_json_schema()},
            "application/x-www-form-urlencoded": {"schema": ProdutoPayload.model_json_schema()},
        },
    }
}

router = APIRouter(tags=["Produtos"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def read_payload(request: Request) -> Optional[dict]:
    """
    Lê o corpo como formulário ou JSON. Devolve None quando o corpo não
    pode ser lido; a validação fica para a rota.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _store_error(db: Session, message: str, error: Exception) -> HTTPException:
    db.rollback()
    logging.error(f"{message}: {error}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _require_complete(data: Optional[dict]) -> ProdutoPayload:
    # Checagem por valor "verdadeiro": zero em quantidade/preco também é rejeitado
    if not data or not all(data.get(field) for field in REQUIRED_FIELDS):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INCOMPLETE_DATA_MESSAGE)
    try:
        return ProdutoPayload.model_validate(data)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INCOMPLETE_DATA_MESSAGE)


# --- CRUD Endpoints ---

@router.get(
    "",
    response_model=List[ProdutoRead],
    summary="Lista todos os produtos",
    responses={500: {"model": MessageResponse, "description": "Erro ao buscar os dados."}},
)
def read_produtos(db: Session = Depends(get_db)):
    """
    Retorna uma lista de todos os produtos.
    """
    try:
        return db.query(Produto).all()
    except STORE_ERRORS as e:
        raise _store_error(db, "Error fetching data", e)


@router.get(
    "/{produto_id}",
    response_model=List[ProdutoRead],
    summary="Busca um produto pelo ID",
    responses={500: {"model": MessageResponse, "description": "Erro ao buscar os dados."}},
)
def read_produto(produto_id: int, db: Session = Depends(get_db)):
    """
    Retorna o produto com o ID informado, dentro de uma lista.
    A lista vem vazia quando o ID não existe.
    """
    try:
        return db.query(Produto).filter(Produto.id == produto_id).all()
    except STORE_ERRORS as e:
        raise _store_error(db, "Error fetching data", e)


@router.post(
    "",
    response_model=ProdutoCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Cria um novo produto",
    openapi_extra=PAYLOAD_OPENAPI,
    responses={
        400: {"model": MessageResponse, "description": "Dados incompletos."},
        500: {"model": MessageResponse, "description": "Erro ao inserir os dados."},
    },
)
def create_produto(data: Optional[dict] = Depends(read_payload), db: Session = Depends(get_db)):
    """
    Cria um novo produto com nome, quantidade, preço e imagem.
    """
    produto = _require_complete(data)

    try:
        db_produto = Produto(**produto.model_dump())
        db.add(db_produto)
        # flush executa o INSERT e preenche o id gerado pelo banco
        db.flush()
        produto_id = db_produto.id
        db.commit()
    except STORE_ERRORS as e:
        raise _store_error(db, "Error inserting data", e)

    return {"message": "Data inserted successfully", "id": produto_id}


@router.put(
    "/{produto_id}",
    response_model=MessageResponse,
    summary="Atualiza um produto",
    openapi_extra=PAYLOAD_OPENAPI,
    responses={
        400: {"model": MessageResponse, "description": "Dados incompletos."},
        404: {"model": MessageResponse, "description": "Produto não encontrado (somente no modo estrito)."},
        500: {"model": MessageResponse, "description": "Erro ao atualizar os dados."},
    },
)
def update_produto(
    produto_id: int,
    data: Optional[dict] = Depends(read_payload),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Substitui os quatro campos do produto. Sem o modo estrito, um ID
    inexistente também responde 200 e nenhuma linha é criada.
    """
    produto = _require_complete(data)

    try:
        updated = (
            db.query(Produto)
            .filter(Produto.id == produto_id)
            .update(produto.model_dump(), synchronize_session=False)
        )
        db.commit()
    except STORE_ERRORS as e:
        raise _store_error(db, "Error updating data", e)

    if updated == 0 and settings.strict_not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return {"message": "Data updated successfully"}


@router.delete(
    "/{produto_id}",
    response_model=MessageResponse,
    summary="Exclui um produto",
    responses={
        404: {"model": MessageResponse, "description": "Produto não encontrado (somente no modo estrito)."},
        500: {"model": MessageResponse, "description": "Erro ao excluir os dados."},
    },
)
def delete_produto(
    produto_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Exclui um produto pelo ID.
    """
    try:
        deleted = (
            db.query(Produto)
            .filter(Produto.id == produto_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except STORE_ERRORS as e:
        raise _store_error(db, "Error deleting data", e)

    if deleted == 0 and settings.strict_not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return {"message": "Data deleted successfully"}
