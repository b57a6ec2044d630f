"""Inicialización del PIX Service: esquema de base de datos y banco por defecto."""

import os
import logging

from sqlalchemy.orm import Session

from pix_service.db import Base, SessionLocal, engine
from pix_service.models import Bank

logger = logging.getLogger(__name__)

DEFAULT_BANK_NAME = "Banco Exemplo"


def get_default_api_key() -> str:
    """
    Lee X_API_KEY del entorno. Sin ella el servicio no puede arrancar.

    Raises:
        SystemExit: con código 1 si la variable no está definida.
    """
    api_key = os.getenv("X_API_KEY")
    if not api_key:
        logger.critical("FATAL: X_API_KEY no está definida en el entorno (.env). El servicio no puede iniciar.")
        raise SystemExit(1)
    return api_key


def seed_default_bank(db: Session, api_key: str) -> bool:
    """
    Inserta el banco por defecto si no existe un banco con esa API Key.
    Un banco existente no se modifica.

    Returns:
        True si se creó el banco, False si ya existía.
    """
    existing = db.query(Bank).filter(Bank.api_key == api_key).first()
    if existing:
        logger.info(f"Banco por defecto ya existente (id={existing.id}).")
        return False

    bank = Bank(name=DEFAULT_BANK_NAME, api_key=api_key)
    db.add(bank)
    db.commit()
    db.refresh(bank)
    logger.info(f"Banco por defecto '{bank.name}' creado (id={bank.id}).")
    return True


def init_db() -> None:
    """Crea las tablas si no existen y siembra el banco por defecto."""
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas de base de datos verificadas/creadas.")

    api_key = get_default_api_key()

    db = SessionLocal()
    try:
        seed_default_bank(db, api_key)
    finally:
        db.close()
