"""
Documentación interactiva de la API (solo desarrollo).

flasgger arma la especificación a partir de los docstrings YAML de las
vistas: Swagger UI queda en /apidocs/ y el documento en /apispec_1.json.
"""
from flasgger import Swagger

PLANTILLA = {
    "info": {
        "title": "Tienda Deportiva API",
        "description": "Catálogo de productos y categorías",
        "version": "1.0.0",
    },
    "definitions": {
        "CategoriaView": {
            "type": "object",
            "properties": {
                "categoriaId": {"type": "integer"},
                "nombre": {"type": "string", "maxLength": 100},
            },
        },
        "ProductoView": {
            "type": "object",
            "properties": {
                "productoId": {"type": "integer"},
                "nombre": {"type": "string"},
                "descripcion": {"type": "string", "x-nullable": True},
                "precio": {"type": "number"},
                "imagenUrl": {"type": "string", "x-nullable": True},
                "categoria": {"$ref": "#/definitions/CategoriaView"},
            },
        },
        "Producto": {
            "type": "object",
            "required": ["nombre", "precio", "categoriaId"],
            "properties": {
                "productoId": {"type": "integer"},
                "nombre": {"type": "string", "maxLength": 150},
                "descripcion": {"type": "string", "x-nullable": True},
                "precio": {"type": "number", "multipleOf": 0.01},
                "imagenUrl": {"type": "string", "maxLength": 250, "x-nullable": True},
                "categoriaId": {"type": "integer"},
            },
        },
    },
}


def registrar_documentacion(app):
    app.config.setdefault("SWAGGER", {"title": "Tienda Deportiva API", "uiversion": 3})
    return Swagger(app, template=PLANTILLA)
