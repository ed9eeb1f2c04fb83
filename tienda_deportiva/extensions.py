import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()
cors = CORS()


def _minusculas(texto):
    return texto.lower() if texto is not None else None


# SQLite no aplica las claves foráneas salvo que se active en cada conexión,
# y su lower() solo convierte letras ASCII
@event.listens_for(Engine, "connect")
def _configurar_sqlite(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.create_function("lower", 1, _minusculas, deterministic=True)
