from decimal import Decimal
from types import SimpleNamespace

import pytest

from tienda_deportiva.dtos import categoria_a_dto, producto_a_dto, precio_a_json


class CategoriaSinColeccion(SimpleNamespace):
    # La proyección nunca debe recorrer los productos de la categoría
    @property
    def productos(self):
        pytest.fail("La vista no debe acceder a Categoria.productos")


def _producto(**cambios):
    datos = dict(
        id=7,
        nombre="Reloj GPS",
        descripcion=None,
        precio=Decimal("799.00"),
        imagen_url="https://img.ejemplo.com/reloj.jpg",
        categoria=CategoriaSinColeccion(id=2, nombre="Running"),
    )
    datos.update(cambios)
    return SimpleNamespace(**datos)


def test_categoria_a_dto():
    categoria = CategoriaSinColeccion(id=3, nombre="Natacion")
    assert categoria_a_dto(categoria) == {"categoriaId": 3, "nombre": "Natacion"}


def test_producto_a_dto_copia_campos_y_embebe_categoria():
    vista = producto_a_dto(_producto())
    assert vista == {
        "productoId": 7,
        "nombre": "Reloj GPS",
        "descripcion": None,
        "precio": 799.0,
        "imagenUrl": "https://img.ejemplo.com/reloj.jpg",
        "categoria": {"categoriaId": 2, "nombre": "Running"},
    }
    assert "productos" not in vista["categoria"]


def test_precio_a_json():
    assert precio_a_json(Decimal("10.50")) == 10.5
    assert precio_a_json(None) is None
