"""Pruebas de las validaciones de formato de las claves PIX."""

import uuid

import pytest

from pix_service.validators import (
    PixType,
    parse_pix_type,
    validate_cnpj,
    validate_cpf,
    validate_email,
    validate_phone,
    validate_pix_value,
    validate_uuid,
)


def test_cpf_requires_exactly_eleven_digits():
    assert validate_cpf("12345678901") is True
    assert validate_cpf("1234567890") is False
    assert validate_cpf("123456789012") is False


@pytest.mark.parametrize("value", ["123.456.789-01", "1234567890a", "12345678901\n", "", None, 12345678901])
def test_cpf_rejects_formatted_or_non_string(value):
    assert validate_cpf(value) is False


def test_cnpj_requires_exactly_fourteen_digits():
    assert validate_cnpj("12345678000199") is True
    assert validate_cnpj("1234567800019") is False
    assert validate_cnpj("12.345.678/0001-99") is False


def test_phone_requires_exactly_eleven_digits():
    assert validate_phone("11987654321") is True
    assert validate_phone("+5511987654321") is False
    assert validate_phone("(11) 98765-4321") is False


@pytest.mark.parametrize("value", ["user@example.com", "a@b.co", "nome.sobrenome@empresa.com.br"])
def test_email_valid(value):
    assert validate_email(value) is True


@pytest.mark.parametrize("value", ["not-an-email", "user@domain", "user @example.com", "@example.com", "a@b@c.com", ""])
def test_email_invalid(value):
    assert validate_email(value) is False


def test_uuid_accepts_standard_versions():
    assert validate_uuid(str(uuid.uuid4())) is True
    assert validate_uuid(str(uuid.uuid1())) is True
    assert validate_uuid(str(uuid.uuid4()).upper()) is True
    assert validate_uuid("00000000-0000-0000-0000-000000000000") is True


@pytest.mark.parametrize("value", [
    uuid.uuid4().hex,                               # sin guiones
    "{" + str(uuid.uuid4()) + "}",                  # con llaves
    "123e4567-e89b-02d3-a456-426614174000",         # versión 0
    "not-a-uuid",
])
def test_uuid_rejects_non_canonical(value):
    assert validate_uuid(value) is False


def test_parse_pix_type():
    assert parse_pix_type("email") is PixType.EMAIL
    assert parse_pix_type("cnpj") is PixType.CNPJ
    assert parse_pix_type("bitcoin") is None
    assert parse_pix_type("EMAIL") is None
    assert parse_pix_type(None) is None


def test_validate_pix_value_dispatches_by_type():
    assert validate_pix_value(PixType.CPF, "12345678901") is True
    assert validate_pix_value(PixType.PHONE, "12345678901") is True
    assert validate_pix_value(PixType.CNPJ, "12345678901") is False
    assert validate_pix_value(PixType.EMAIL, "12345678901") is False
