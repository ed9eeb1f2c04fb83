from decimal import Decimal

import pytest

from tienda_deportiva.main import create_app
from tienda_deportiva.extensions import db
from tienda_deportiva.models import Categoria, Producto


# Aplicación de pruebas con SQLite en memoria
@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# Catálogo de prueba: 3 categorías y 8 productos
@pytest.fixture
def catalogo(app):
    futbol = Categoria(nombre="Futbol")
    running = Categoria(nombre="Running")
    natacion = Categoria(nombre="Natacion")
    db.session.add_all([futbol, running, natacion])
    db.session.commit()

    productos = [
        Producto(nombre="Balón Profesional", descripcion="Talla 5, cosido a mano",
                 precio=Decimal("89.90"), categoria_id=futbol.id),
        Producto(nombre="Botines", descripcion="Para césped natural",
                 precio=Decimal("249.00"), categoria_id=futbol.id),
        Producto(nombre="Canilleras", descripcion=None,
                 precio=Decimal("35.50"), categoria_id=futbol.id),
        Producto(nombre="Zapatillas", descripcion="Amortiguación para maratón",
                 precio=Decimal("399.99"), categoria_id=running.id),
        Producto(nombre="Reloj GPS", descripcion="Mide ritmo y distancia",
                 precio=Decimal("799.00"), imagen_url="https://img.ejemplo.com/reloj.jpg",
                 categoria_id=running.id),
        Producto(nombre="Lentes", descripcion="Antiempañante 100%",
                 precio=Decimal("45.00"), categoria_id=natacion.id),
        Producto(nombre="Gorro", descripcion=None,
                 precio=Decimal("25.00"), categoria_id=natacion.id),
        Producto(nombre="Polo técnico", descripcion="Tela respirable para correr",
                 precio=Decimal("59.90"), categoria_id=running.id),
    ]
    db.session.add_all(productos)
    db.session.commit()

    return {
        "categorias": {c.nombre: c.id for c in (futbol, running, natacion)},
        "productos": {p.nombre: p.id for p in productos},
    }
