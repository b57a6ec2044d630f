"""Autenticación de bancos por API Key (cabecera x-api-key)."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pix_service.db import get_db
from pix_service.models import Bank

logger = logging.getLogger(__name__)

API_KEY_NAME = "x-api-key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False) # auto_error=False para manejo manual


def authenticate_api_key(
    request: Request,
    api_key: Optional[str] = Depends(api_key_header),
    db: Session = Depends(get_db),
) -> Bank:
    """
    Resuelve la API Key al banco que la posee.
    Deja el ID del banco en request.state.bank_id para uso posterior.
    """
    if not api_key:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "API Key não fornecida")

    try:
        bank = db.query(Bank).filter(Bank.api_key == api_key).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error de base de datos en la autenticación: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno na autenticação")

    if bank is None:
        logger.warning(f"Intento de acceso con API Key inválida en {request.url.path}")
        raise HTTPException(status.HTTP_403_FORBIDDEN, "API Key inválida")

    request.state.bank_id = bank.id
    return bank
