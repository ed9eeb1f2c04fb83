"""
Errores del catálogo y su traducción a respuestas JSON.

Las rutas lanzan o dejan propagar estas excepciones; aquí se convierten en
``{"msg": ...}`` con el código HTTP correspondiente.
"""
from flask import jsonify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException

from tienda_deportiva.extensions import db
from tienda_deportiva.logs import logger


class ErrorEntrada(Exception):
    """Datos de entrada inválidos (400)."""

    def __init__(self, msg, errores=None):
        super().__init__(msg)
        self.msg = msg
        self.errores = errores or {}

    def to_dict(self):
        cuerpo = {'msg': self.msg}
        if self.errores:
            cuerpo['errores'] = self.errores
        return cuerpo


def registrar_manejadores(app):
    @app.errorhandler(ErrorEntrada)
    def manejar_error_entrada(error):
        logger.warning(f"[manejar_error_entrada] {error.msg}: {error.errores}")
        return jsonify(error.to_dict()), 400

    @app.errorhandler(HTTPException)
    def manejar_http(error):
        # Las redirecciones de werkzeug (barra final) se dejan pasar tal cual
        if error.code is None or error.code < 400:
            return error
        return jsonify({'msg': error.description}), error.code

    @app.errorhandler(StaleDataError)
    def manejar_conflicto_concurrencia(error):
        db.session.rollback()
        logger.warning(f"[manejar_conflicto_concurrencia] {error}")
        return jsonify({'msg': 'Conflicto de concurrencia: el registro fue modificado por otra petición'}), 409

    @app.errorhandler(IntegrityError)
    def manejar_conflicto_integridad(error):
        db.session.rollback()
        logger.warning(f"[manejar_conflicto_integridad] {error.orig}")
        return jsonify({'msg': 'La operación viola una restricción de integridad del catálogo'}), 409

    @app.errorhandler(SQLAlchemyError)
    def manejar_error_bd(error):
        db.session.rollback()
        logger.exception("[manejar_error_bd] Error de base de datos")
        return jsonify({'msg': 'Error interno del servidor'}), 500
