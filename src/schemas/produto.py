# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Produto.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# Corpo de criação/atualização. Os campos são opcionais aqui para que a
# checagem de presença aconteça na rota e devolva 400.
class ProdutoPayload(BaseModel):
    nome: Optional[str] = Field(None, description="Nome do produto.")
    quantidade: Optional[float] = Field(None, description="Quantidade do produto.")
    preco: Optional[float] = Field(None, description="Preço do produto.")
    imagem: Optional[str] = Field(None, description="URL da imagem do produto.")

# Schema para leitura/retorno de Produto
class ProdutoRead(BaseModel):
    id: int
    nome: str
    quantidade: float
    preco: float
    imagem: str

    model_config = ConfigDict(from_attributes=True)

class MessageResponse(BaseModel):
    message: str

class ProdutoCreated(MessageResponse):
    id: int
