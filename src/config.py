# -*- coding: utf-8 -*-
"""
Configuração da aplicação lida das variáveis de ambiente (e do arquivo .env).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./database/produtos.db"


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


@dataclass
class Settings:
    database_url: Optional[str] = None
    db_host: Optional[str] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_port: Optional[int] = None
    pool_max: int = 10
    idle_timeout_ms: int = 30000
    connect_timeout_ms: int = 2000
    host: str = "0.0.0.0"
    port: int = 3000
    api_server_url: Optional[str] = None
    strict_not_found: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env_file=None) -> "Settings":
        """
        Carrega o .env (se existir) e monta as configurações a partir do ambiente.
        Variáveis já definidas no processo não são sobrescritas pelo .env.
        """
        load_dotenv(env_file)
        db_port = os.environ.get("DB_PORT")
        return cls(
            database_url=os.environ.get("DATABASE_URL") or None,
            db_host=os.environ.get("DB_HOST") or None,
            db_user=os.environ.get("DB_USER") or None,
            db_password=os.environ.get("DB_PASSWORD") or None,
            db_name=os.environ.get("DB_NAME") or None,
            db_port=int(db_port) if db_port else None,
            pool_max=_env_int(os.environ.get("DB_POOL_MAX"), 10),
            idle_timeout_ms=_env_int(os.environ.get("DB_IDLE_TIMEOUT_MS"), 30000),
            connect_timeout_ms=_env_int(os.environ.get("DB_CONNECT_TIMEOUT_MS"), 2000),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=_env_int(os.environ.get("PORT"), 3000),
            api_server_url=os.environ.get("API_SERVER_URL") or None,
            strict_not_found=_env_bool(os.environ.get("PRODUTO_STRICT_NOT_FOUND")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_file=os.environ.get("LOG_FILE") or None,
        )
