"""PIX Service: registro, consulta y eliminación de claves PIX para bancos autenticados por API Key."""

import logging
import os
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Depends, HTTPException, status, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from dotenv import load_dotenv
import uvicorn

# Importaciones locales
from pix_service import schemas
from pix_service.auth import authenticate_api_key
from pix_service.bootstrap import init_db
from pix_service.db import get_db
from pix_service.models import PixRecord
from pix_service.validators import (
    VALID_PIX_TYPES,
    parse_pix_type,
    validate_cpf,
    validate_pix_value,
)

# Carga variables de entorno
load_dotenv()

# Configura logger
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000

INVALID_STRUCTURE = "Estrutura de dados inválida. Use {accountInfo: {...}, pixInfo: {...}}"
RECORD_NOT_FOUND = "Registro não encontrado"

# Inicializa FastAPI
app = FastAPI(
    title="PIX Service",
    description="Registra, consulta y elimina claves PIX (email, celular, CPF, CNPJ, UUID).",
    version="1.0.0"
)

# --- Métricas Prometheus ---
REQUEST_COUNT = Counter(
    "pix_requests_total",
    "Total requests processed by PIX Service",
    ["method", "endpoint", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "pix_request_latency_seconds",
    "Request latency in seconds for PIX Service",
    ["endpoint"]
)


@app.on_event("startup")
def startup_event():
    logger.info("Iniciando PIX Service...")
    init_db()


# --- Manejo de errores: todas las respuestas de error son {"error": "..."} ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Cuerpo inválido en {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": INVALID_STRUCTURE})


# --- Middleware para Métricas ---
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start_time = time.time()
    response = None
    status_code = 500 # Default

    try:
        response = await call_next(request)
        status_code = response.status_code
    except Exception as exc:
        logger.error(f"Unhandled exception during request processing: {exc}", exc_info=True)
        response = JSONResponse(status_code=500, content={"error": "Internal Server Error"})
    finally:
        latency = time.time() - start_time
        # Plantilla de la ruta (no la URL real) para no meter claves PIX en las etiquetas
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        final_status_code = getattr(response, 'status_code', status_code)
        REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)
        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=final_status_code
        ).inc()

    return response


def _db_error_detail(exc: SQLAlchemyError) -> str:
    """Mensaje crudo del driver (sin el SQL que SQLAlchemy agrega)."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _is_blank(value) -> bool:
    return value is None or value == ""


# --- Endpoints de Salud y Métricas ---
@app.get("/status", response_model=schemas.StatusResponse, tags=["Monitoring"])
def status_check():
    """Estado del servicio. No consulta la base de datos."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "API funcionando", "timestamp": timestamp}


@app.get("/metrics", tags=["Monitoring"])
def metrics():
    """Exposes application metrics for Prometheus."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# --- Endpoints de API (requieren x-api-key) ---

@app.get("/record/{pix_type}/{pix_value}",
         response_model=schemas.PixRecordResponse,
         tags=["PIX"],
         dependencies=[Depends(authenticate_api_key)])
def get_record(pix_type: str, pix_value: str, db: Session = Depends(get_db)):
    """Busca un registro por tipo y valor exactos de la clave PIX."""
    try:
        record = db.query(PixRecord).filter(
            PixRecord.pix_type == pix_type,
            PixRecord.pix_value == pix_value
        ).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error DB buscando registro {pix_type}: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, _db_error_detail(e))

    if record is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, RECORD_NOT_FOUND)

    return schemas.PixRecordResponse.from_record(record)


@app.post("/register",
          response_model=schemas.PixRecordCreated,
          status_code=status.HTTP_201_CREATED,
          tags=["PIX"],
          dependencies=[Depends(authenticate_api_key)])
def register(payload: schemas.PixRecordCreate, db: Session = Depends(get_db)):
    """
    Registra una clave PIX apuntando a los datos de una cuenta.
    Las validaciones se ejecutan en orden y la primera que falla define el error.
    """
    account = payload.account_info
    pix = payload.pix_info

    # 1. Estructura
    if account is None or pix is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, INVALID_STRUCTURE)

    # 2. Campos obligatorios
    required_fields = [
        (account.nome, "Nome é obrigatório"),
        (account.cpf, "CPF é obrigatório"),
        (account.banco, "Banco é obrigatório"),
        (account.agencia, "Agência é obrigatória"),
        (account.conta, "Conta é obrigatória"),
        (pix.type, "Tipo de chave PIX é obrigatório"),
        (pix.value, "Valor da chave PIX é obrigatório"),
    ]
    for value, message in required_fields:
        if _is_blank(value):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, message)

    # 3. CPF del titular
    if not validate_cpf(account.cpf):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "CPF do titular é inválido. Deve ter 11 dígitos.")

    # 4. Tipo de clave
    pix_type = parse_pix_type(pix.type)
    if pix_type is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Tipo de chave PIX inválido. Use: {VALID_PIX_TYPES}")

    # 5. Valor de la clave según su tipo
    if not validate_pix_value(pix_type, pix.value):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Valor da chave PIX ({pix_type.value}) é inválido")

    new_record = PixRecord(
        pix_type=pix_type.value,
        pix_value=pix.value,
        nome=account.nome,
        cpf=account.cpf,
        banco=account.banco,
        agencia=account.agencia,
        conta=account.conta,
    )

    try:
        db.add(new_record)
        db.commit()
        db.refresh(new_record)
    except IntegrityError:
        db.rollback()
        logger.warning(f"Clave PIX ({pix_type.value}) ya registrada.")
        raise HTTPException(status.HTTP_409_CONFLICT, f"Chave PIX ({pix_type.value}) já registrada")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error DB registrando clave PIX: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, _db_error_detail(e))

    logger.info(f"Registro PIX creado: id={new_record.id}, tipo={pix_type.value}")

    return {
        "id": new_record.id,
        "account_info": account,
        "pix_info": schemas.PixInfo(type=pix_type.value, value=pix.value),
        "message": "Registro criado com sucesso",
    }


@app.delete("/record/{pix_type}/{pix_value}",
            response_model=schemas.DeleteResponse,
            tags=["PIX"],
            dependencies=[Depends(authenticate_api_key)])
def delete_record(pix_type: str, pix_value: str, db: Session = Depends(get_db)):
    """Elimina el registro con el tipo y valor exactos de la clave PIX."""
    parsed_type = parse_pix_type(pix_type)
    if parsed_type is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Tipo de chave PIX inválido")

    try:
        deleted_count = db.query(PixRecord).filter(
            PixRecord.pix_type == parsed_type.value,
            PixRecord.pix_value == pix_value
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error DB eliminando registro {parsed_type.value}: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, _db_error_detail(e))

    if deleted_count == 0:
        raise HTTPException(status.HTTP_404_NOT_FOUND, RECORD_NOT_FOUND)

    logger.info(f"Registro PIX eliminado: tipo={parsed_type.value}")
    return {"message": "Registro excluído com sucesso", "deleted_count": deleted_count}


def run():
    """Levanta el servicio con uvicorn en el puerto PORT (3000 por defecto)."""
    port = int(os.getenv("PORT") or DEFAULT_PORT)
    # Se pasa el objeto app: importarlo de nuevo por nombre duplicaría las métricas
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
