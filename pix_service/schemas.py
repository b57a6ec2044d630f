"""Modelos Pydantic (schemas) para la API del PIX Service."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Schemas de entrada ---

class AccountInfo(BaseModel):
    """
    Datos de la cuenta del titular.
    Todos opcionales: la obligatoriedad se valida en el endpoint para devolver
    el mensaje específico de cada campo.
    """
    nome: Optional[str] = None
    cpf: Optional[str] = None
    banco: Optional[str] = None
    agencia: Optional[str] = None
    conta: Optional[str] = None


class PixInfo(BaseModel):
    type: Optional[str] = None
    value: Optional[str] = None


class PixRecordCreate(BaseModel):
    """Cuerpo de POST /register: {accountInfo: {...}, pixInfo: {...}}."""
    account_info: Optional[AccountInfo] = Field(None, alias="accountInfo")
    pix_info: Optional[PixInfo] = Field(None, alias="pixInfo")

    model_config = ConfigDict(populate_by_name=True)


# --- Schemas de salida ---

class PixRecordResponse(BaseModel):
    """Registro PIX con la fila plana reorganizada en accountInfo / pixInfo."""
    id: int
    account_info: AccountInfo = Field(..., alias="accountInfo")
    pix_info: PixInfo = Field(..., alias="pixInfo")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_record(cls, record) -> "PixRecordResponse":
        return cls(
            id=record.id,
            account_info=AccountInfo(
                nome=record.nome,
                cpf=record.cpf,
                banco=record.banco,
                agencia=record.agencia,
                conta=record.conta,
            ),
            pix_info=PixInfo(type=record.pix_type, value=record.pix_value),
            created_at=record.created_at,
        )


class PixRecordCreated(BaseModel):
    id: int
    account_info: AccountInfo = Field(..., alias="accountInfo")
    pix_info: PixInfo = Field(..., alias="pixInfo")
    message: str

    model_config = ConfigDict(populate_by_name=True)


class DeleteResponse(BaseModel):
    message: str
    deleted_count: int = Field(..., alias="deletedCount")

    model_config = ConfigDict(populate_by_name=True)


class StatusResponse(BaseModel):
    status: str
    timestamp: str
