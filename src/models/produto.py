# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Produto.
"""
from sqlalchemy import Column, Float, Integer, String
from src.database import Base

class Produto(Base):
    __tablename__ = 'produto'

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(255), nullable=False)
    quantidade = Column(Float, nullable=False)
    preco = Column(Float, nullable=False)
    imagem = Column(String(2048), nullable=False)
