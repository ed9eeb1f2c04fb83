"""
Consultas de lectura del catálogo.

El listado combina dos grupos de filtros opcionales (texto libre y nombres de
categoría) que se aplican en conjunción y siempre ordena por id. La muestra
aleatoria no filtra y cambia de orden en cada llamada.
"""
from sqlalchemy import String, func, or_, select
from sqlalchemy.orm import contains_eager

from tienda_deportiva.dtos import producto_a_dto
from tienda_deportiva.extensions import db
from tienda_deportiva.models import Categoria, Producto

LIMITE_ALEATORIOS = 6


def normalizar_busqueda(buscar):
    """Devuelve el término recortado y en minúsculas, o None si está vacío."""
    if buscar is None:
        return None
    termino = buscar.strip().lower()
    return termino or None


def normalizar_categorias(categorias):
    """Descarta entradas vacías o en blanco; una lista vacía significa sin filtro."""
    if not categorias:
        return []
    validas = [nombre for nombre in categorias if nombre and nombre.strip()]
    return list(dict.fromkeys(validas))


def _contiene(columna, termino):
    # NULL LIKE ... es NULL: una descripción ausente cuenta como no coincidencia
    return func.lower(columna, type_=String).contains(termino, autoescape=True)


def _consulta_base():
    return (
        select(Producto)
        .join(Producto.categoria)
        .options(contains_eager(Producto.categoria))
    )


def construir_consulta_productos(buscar=None, categorias=None):
    consulta = _consulta_base()

    termino = normalizar_busqueda(buscar)
    if termino:
        consulta = consulta.where(or_(
            _contiene(Producto.nombre, termino),
            _contiene(Producto.descripcion, termino),
            _contiene(Categoria.nombre, termino),
        ))

    nombres = normalizar_categorias(categorias)
    if nombres:
        # Coincidencia exacta con el nombre tal como está almacenado
        consulta = consulta.where(Categoria.nombre.in_(nombres))

    return consulta.order_by(Producto.id)


def listar_productos(buscar=None, categorias=None):
    """Genera las vistas de producto que cumplen los filtros, ordenadas por id.

    La consulta se ejecuta de nuevo en cada llamada; nada queda en caché.
    """
    resultado = db.session.scalars(construir_consulta_productos(buscar, categorias))
    for producto in resultado:
        yield producto_a_dto(producto)


def construir_consulta_aleatoria(limite=LIMITE_ALEATORIOS):
    return _consulta_base().order_by(func.random()).limit(limite)


def muestra_aleatoria(limite=LIMITE_ALEATORIOS):
    productos = db.session.scalars(construir_consulta_aleatoria(limite)).all()
    return [producto_a_dto(producto) for producto in productos]


def obtener_producto(producto_id):
    consulta = _consulta_base().where(Producto.id == producto_id)
    producto = db.session.scalars(consulta).first()
    return producto_a_dto(producto) if producto is not None else None


def producto_existe(producto_id):
    consulta = select(Producto.id).where(Producto.id == producto_id)
    return db.session.execute(consulta).first() is not None
