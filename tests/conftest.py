"""
Configuraciones y fixtures compartidos para las pruebas automatizadas con pytest.
Levanta la app en proceso (TestClient) sobre una base SQLite temporal.
"""

import os
import tempfile
import uuid

import pytest

# El entorno debe quedar definido ANTES de importar la app (el engine se crea al importar)
TEST_DB_DIR = tempfile.mkdtemp(prefix="pix_service_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DB_DIR, 'test.db')}"
DEFAULT_API_KEY = "test-default-api-key"
os.environ["X_API_KEY"] = DEFAULT_API_KEY

from fastapi.testclient import TestClient  # noqa: E402

from pix_service.main import app  # noqa: E402


def random_digits(length: int) -> str:
    """Genera una cadena de dígitos única para no chocar con registros de otras pruebas."""
    return str(uuid.uuid4().int)[:length]


@pytest.fixture(scope="session")
def client():
    """Cliente HTTP de la sesión. El bloque 'with' ejecuta el evento de startup (tablas + banco por defecto)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def auth_headers():
    """Cabecera con la API Key del banco sembrado al inicio."""
    return {"x-api-key": DEFAULT_API_KEY}


@pytest.fixture
def account_info():
    """Datos de cuenta válidos para registrar claves."""
    return {
        "nome": "Maria da Silva",
        "cpf": random_digits(11),
        "banco": "Banco Exemplo",
        "agencia": "0001",
        "conta": "123456-7",
    }


@pytest.fixture
def clear_overrides():
    """Limpia los overrides de dependencias al terminar la prueba."""
    yield app.dependency_overrides
    app.dependency_overrides.clear()
