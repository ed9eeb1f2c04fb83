"""
Configuración de la aplicación
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Directorio base del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent

# Cargar .env desde el directorio del proyecto
load_dotenv(BASE_DIR / '.env')


def _lista_origenes(valor):
    """Convierte "https://a.com, https://b.com" en una lista de orígenes."""
    return [origen.strip() for origen in (valor or "").split(",") if origen.strip()]


class Config:
    """Configuración base (producción por defecto)"""

    # La cadena de conexión llega siempre desde el entorno
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    SQLALCHEMY_ECHO = False

    # CORS: sin orígenes configurados no se envía ninguna cabecera
    CORS_ORIGINS = _lista_origenes(os.getenv("CORS_ORIGINS"))

    # Documentación interactiva (Swagger UI)
    SWAGGER_UI = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Tamaño de la muestra de /api/productos/aleatorios
    LIMITE_ALEATORIOS = int(os.getenv("LIMITE_ALEATORIOS", "6"))


class DevelopmentConfig(Config):
    """Configuración de desarrollo"""
    DEBUG = True
    # Ruta relativa: Flask-SQLAlchemy la resuelve dentro de instance/
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or "sqlite:///tienda_deportiva.db"
    CORS_ORIGINS = _lista_origenes(os.getenv("CORS_ORIGINS", "*"))
    SWAGGER_UI = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(Config):
    """Configuración de pruebas"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CORS_ORIGINS = []
    SWAGGER_UI = False


class ProductionConfig(Config):
    """Configuración de producción"""
    DEBUG = False


# Mapeo de configuraciones
config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(nombre=None):
    """Obtiene la configuración según el entorno (producción si no se indica)"""
    nombre = nombre or os.getenv("FLASK_ENV", "production")
    return config_by_name.get(nombre, ProductionConfig)
