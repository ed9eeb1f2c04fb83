from flask import Blueprint, request, jsonify, url_for

from tienda_deportiva.dtos import categoria_a_dto
from tienda_deportiva.errores import ErrorEntrada
from tienda_deportiva.extensions import db
from tienda_deportiva.logs import logger
from tienda_deportiva.models import Categoria

categoria_bp = Blueprint("categoria", __name__, url_prefix="/api/categorias")

MAX_NOMBRE = 100


def _leer_nombre(datos):
    if not isinstance(datos, dict):
        raise ErrorEntrada("El cuerpo de la petición debe ser un objeto JSON")
    nombre = datos.get("nombre")
    if not isinstance(nombre, str) or not nombre.strip():
        raise ErrorEntrada("Datos de categoría inválidos", {"nombre": "El nombre es obligatorio"})
    if len(nombre) > MAX_NOMBRE:
        raise ErrorEntrada(
            "Datos de categoría inválidos",
            {"nombre": f"Admite como máximo {MAX_NOMBRE} caracteres"}
        )
    return nombre


def _nombre_duplicado(nombre, excluir_id=None):
    consulta = Categoria.query.filter_by(nombre=nombre)
    if excluir_id is not None:
        consulta = consulta.filter(Categoria.id != excluir_id)
    return consulta.first() is not None


# Listar todas las categorías
@categoria_bp.route("", methods=["GET"])
def listar_categorias():
    """Lista las categorías ordenadas por nombre.
    ---
    tags:
      - categorias
    responses:
      200:
        description: Categorías
        schema:
          type: array
          items:
            $ref: '#/definitions/CategoriaView'
    """
    categorias = Categoria.query.order_by(Categoria.nombre).all()
    return jsonify([categoria_a_dto(c) for c in categorias])


# Obtener una categoría por id
@categoria_bp.route("/<int:categoria_id>", methods=["GET"])
def obtener_categoria(categoria_id):
    """Obtiene una categoría.
    ---
    tags:
      - categorias
    parameters:
      - name: categoria_id
        in: path
        type: integer
        required: true
    responses:
      200:
        description: Categoría
        schema:
          $ref: '#/definitions/CategoriaView'
      404:
        description: Categoría no encontrada
    """
    cat = db.get_or_404(Categoria, categoria_id, description="Categoría no encontrada")
    return jsonify(categoria_a_dto(cat))


# Crear nueva categoría
@categoria_bp.route("", methods=["POST"])
def crear_categoria():
    """Crea una categoría.
    ---
    tags:
      - categorias
    parameters:
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/CategoriaView'
    responses:
      201:
        description: Categoría creada
        schema:
          $ref: '#/definitions/CategoriaView'
      400:
        description: Nombre inválido
      409:
        description: Nombre duplicado
    """
    nombre = _leer_nombre(request.get_json(silent=True))
    if _nombre_duplicado(nombre):
        logger.warning(f"[crear_categoria] Nombre duplicado: {nombre!r}")
        return jsonify({"msg": "Ya existe una categoría con ese nombre"}), 409

    cat = Categoria(nombre=nombre)
    db.session.add(cat)
    db.session.commit()
    logger.info(f"[crear_categoria] Categoría creada: {nombre} con ID {cat.id}")
    ubicacion = url_for("categoria.obtener_categoria", categoria_id=cat.id)
    return jsonify(categoria_a_dto(cat)), 201, {"Location": ubicacion}


# Renombrar categoría por id
@categoria_bp.route("/<int:categoria_id>", methods=["PUT"])
def editar_categoria(categoria_id):
    """Renombra una categoría.
    ---
    tags:
      - categorias
    parameters:
      - name: categoria_id
        in: path
        type: integer
        required: true
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/CategoriaView'
    responses:
      200:
        description: Categoría renombrada
        schema:
          $ref: '#/definitions/CategoriaView'
      400:
        description: Nombre inválido o id distinto al de la ruta
      404:
        description: Categoría no encontrada
      409:
        description: Nombre duplicado
    """
    datos = request.get_json(silent=True)
    nombre = _leer_nombre(datos)

    id_cuerpo = datos.get("categoriaId")
    if id_cuerpo is not None and (isinstance(id_cuerpo, bool) or id_cuerpo != categoria_id):
        logger.warning(f"[editar_categoria] Id de ruta {categoria_id} distinto del cuerpo {id_cuerpo!r}")
        return jsonify({"msg": "El id de la ruta no coincide con el categoriaId del cuerpo"}), 400

    cat = db.get_or_404(Categoria, categoria_id, description="Categoría no encontrada")
    if _nombre_duplicado(nombre, excluir_id=categoria_id):
        logger.warning(f"[editar_categoria] Nombre duplicado: {nombre!r}")
        return jsonify({"msg": "Ya existe una categoría con ese nombre"}), 409

    cat.nombre = nombre
    db.session.commit()
    logger.info(f"[editar_categoria] Categoría {categoria_id} renombrada a {nombre}")
    return jsonify(categoria_a_dto(cat))


# Borrar categoría por id; nunca arrastra ni deja huérfanos a sus productos
@categoria_bp.route("/<int:categoria_id>", methods=["DELETE"])
def borrar_categoria(categoria_id):
    """Elimina una categoría sin productos.
    ---
    tags:
      - categorias
    parameters:
      - name: categoria_id
        in: path
        type: integer
        required: true
    responses:
      204:
        description: Categoría eliminada
      404:
        description: Categoría no encontrada
      409:
        description: La categoría tiene productos asociados
    """
    cat = db.get_or_404(Categoria, categoria_id, description="Categoría no encontrada")
    if cat.productos.count() > 0:
        logger.warning(f"[borrar_categoria] Categoría {categoria_id} tiene productos asociados")
        return jsonify({"msg": "La categoría tiene productos asociados"}), 409

    db.session.delete(cat)
    db.session.commit()
    logger.info(f"[borrar_categoria] Categoría {categoria_id} eliminada")
    return "", 204
