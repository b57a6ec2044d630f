"""Configuración de la conexión a la base de datos SQLite usando SQLAlchemy para el PIX Service."""

import os
import logging
from sqlalchemy import create_engine, exc
from sqlalchemy.orm import sessionmaker
from sqlalchemy.ext.declarative import declarative_base
from dotenv import load_dotenv

# Configuración del logger
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Carga variables de entorno desde el archivo .env
load_dotenv()

# Archivo SQLite relativo al directorio de trabajo (se crea en el primer arranque)
SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database.db")

connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # FastAPI ejecuta endpoints síncronos en un threadpool
    connect_args = {"check_same_thread": False}

# Engine único para todo el proceso; vive lo mismo que el proceso.
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
logger.info(f"Engine de base de datos configurado: {engine.url.render_as_string(hide_password=True)}")

# Crea una fábrica de sesiones (SessionLocal)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Crea una clase base (Base) para los modelos declarativos
Base = declarative_base()


def get_db():
    """Dependencia de FastAPI: abre una sesión por petición y la cierra al terminar."""
    db = SessionLocal()
    try:
        yield db
    except exc.SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error de base de datos durante la petición: {e}", exc_info=True)
        raise
    finally:
        db.close()
