"""Define los modelos de las tablas 'banks' y 'pix_records' usando SQLAlchemy ORM."""

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func

from pix_service.db import Base


class Bank(Base):
    """
    Banco (cliente de la API) identificado por su API Key.
    Solo se crea en el arranque (banco por defecto).
    """
    __tablename__ = "banks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    api_key = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class PixRecord(Base):
    """
    Registro de una clave PIX apuntando a los datos de una cuenta bancaria.
    El par (pix_type, pix_value) es único: una clave apunta a una sola cuenta.
    """
    __tablename__ = "pix_records"
    __table_args__ = (
        UniqueConstraint("pix_type", "pix_value", name="uq_pix_records_type_value"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # String y no Enum: la búsqueda acepta cualquier tipo y simplemente no encuentra nada.
    pix_type = Column(String(10), nullable=False)
    pix_value = Column(String(255), nullable=False)

    # Datos de la cuenta del titular
    nome = Column(String(255), nullable=False)
    cpf = Column(String(11), nullable=False)
    banco = Column(String(100), nullable=False)
    agencia = Column(String(20), nullable=False)
    conta = Column(String(30), nullable=False)

    created_at = Column(DateTime, server_default=func.now())
