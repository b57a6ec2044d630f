"""Validaciones de formato para las claves PIX (email, celular, CPF, CNPJ y UUID)."""

import enum
import re
from typing import Callable, Dict, Optional

EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_REGEX = re.compile(r"[0-9]{11}")
CPF_REGEX = re.compile(r"[0-9]{11}")
CNPJ_REGEX = re.compile(r"[0-9]{14}")
# UUID RFC-4122 (versiones 1 a 8), más los UUID "nil" y "max"
UUID_REGEX = re.compile(
    r"(?:[0-9a-f]{8}-[0-9a-f]{4}-[1-8][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
    r"|00000000-0000-0000-0000-000000000000"
    r"|ffffffff-ffff-ffff-ffff-ffffffffffff)",
    re.IGNORECASE,
)


class PixType(str, enum.Enum):
    """Tipos de clave PIX aceptados."""
    EMAIL = "email"
    PHONE = "phone"
    CPF = "cpf"
    CNPJ = "cnpj"
    UUID = "uuid"


def _matches(pattern: re.Pattern, value) -> bool:
    # fullmatch: sin '$' que acepte un salto de línea final
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate_email(value) -> bool:
    return _matches(EMAIL_REGEX, value)


def validate_phone(value) -> bool:
    """Celular brasileño: DDD + número, 11 dígitos sin separadores."""
    return _matches(PHONE_REGEX, value)


def validate_cpf(value) -> bool:
    """Solo formato (11 dígitos). No se calcula el dígito verificador."""
    return _matches(CPF_REGEX, value)


def validate_cnpj(value) -> bool:
    """Solo formato (14 dígitos). No se calcula el dígito verificador."""
    return _matches(CNPJ_REGEX, value)


def validate_uuid(value) -> bool:
    return _matches(UUID_REGEX, value)


PIX_VALIDATORS: Dict[PixType, Callable[[str], bool]] = {
    PixType.EMAIL: validate_email,
    PixType.PHONE: validate_phone,
    PixType.CPF: validate_cpf,
    PixType.CNPJ: validate_cnpj,
    PixType.UUID: validate_uuid,
}

VALID_PIX_TYPES = ", ".join(pix_type.value for pix_type in PixType)


def parse_pix_type(value) -> Optional[PixType]:
    """
    Convierte el texto recibido en un PixType.

    Returns:
        El PixType correspondiente, o None si el valor no es uno de los tipos aceptados.
    """
    try:
        return PixType(value)
    except (ValueError, TypeError):
        return None


def validate_pix_value(pix_type: PixType, value) -> bool:
    """Valida el valor de la clave con el validador que corresponde a su tipo."""
    return PIX_VALIDATORS[pix_type](value)
