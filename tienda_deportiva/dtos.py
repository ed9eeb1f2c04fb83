"""
Proyección de entidades a las formas que viajan por la API.

Las vistas nunca incluyen ``Categoria.productos``: la relación es cíclica y
solo existe en la capa de acceso a datos.
"""


def precio_a_json(precio):
    return float(precio) if precio is not None else None


def categoria_a_dto(categoria):
    return {
        "categoriaId": categoria.id,
        "nombre": categoria.nombre
    }


def producto_a_dto(producto):
    return {
        "productoId": producto.id,
        "nombre": producto.nombre,
        "descripcion": producto.descripcion,
        "precio": precio_a_json(producto.precio),
        "imagenUrl": producto.imagen_url,
        "categoria": categoria_a_dto(producto.categoria)
    }
