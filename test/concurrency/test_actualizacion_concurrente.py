# Simula modificaciones concurrentes sobre la misma fila usando una segunda
# conexión a una base SQLite en archivo, y lanza peticiones simultáneas con hilos
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

import pytest
from sqlalchemy import text

from tienda_deportiva.main import create_app
from tienda_deportiva.extensions import db
from tienda_deportiva.models import Categoria, Producto


@pytest.fixture
def app(tmp_path):
    ruta = tmp_path / "concurrencia.db"
    app = create_app("testing", SQLALCHEMY_DATABASE_URI=f"sqlite:///{ruta}")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def producto_id(app):
    categoria = Categoria(nombre="Tenis")
    db.session.add(categoria)
    db.session.commit()
    producto = Producto(nombre="Raqueta", precio=Decimal("320.00"), categoria_id=categoria.id)
    db.session.add(producto)
    db.session.commit()
    return producto.id


def _payload(producto_id):
    categoria_id = Categoria.query.filter_by(nombre="Tenis").first().id
    return {"productoId": producto_id, "nombre": "Raqueta pro", "precio": 350, "categoriaId": categoria_id}


def _interferir_antes_de_confirmar(monkeypatch, sentencia, producto_id):
    # Otra conexión modifica la fila justo antes del commit de la petición
    commit_real = db.session.commit

    def commit_con_interferencia():
        with db.engine.begin() as conexion:
            conexion.execute(text(sentencia), {"id": producto_id})
        commit_real()

    monkeypatch.setattr(db.session, "commit", commit_con_interferencia)


def test_actualizacion_con_conflicto_devuelve_409(app, producto_id, monkeypatch):
    payload = _payload(producto_id)
    _interferir_antes_de_confirmar(
        monkeypatch, "UPDATE productos SET version = version + 1 WHERE id = :id", producto_id
    )

    res = app.test_client().put(f"/api/productos/{producto_id}", json=payload)
    assert res.status_code == 409
    monkeypatch.undo()

    # El cambio de la petición perdedora no se aplicó
    db.session.expire_all()
    assert db.session.get(Producto, producto_id).nombre == "Raqueta"


def test_actualizacion_de_producto_borrado_devuelve_404(app, producto_id, monkeypatch):
    payload = _payload(producto_id)
    _interferir_antes_de_confirmar(monkeypatch, "DELETE FROM productos WHERE id = :id", producto_id)

    res = app.test_client().put(f"/api/productos/{producto_id}", json=payload)
    assert res.status_code == 404


def test_borrado_de_producto_ya_borrado_devuelve_404(app, producto_id, monkeypatch):
    _interferir_antes_de_confirmar(monkeypatch, "DELETE FROM productos WHERE id = :id", producto_id)

    res = app.test_client().delete(f"/api/productos/{producto_id}")
    assert res.status_code == 404


def test_lecturas_concurrentes(app, producto_id):
    def listar(_):
        res = app.test_client().get("/api/productos?buscar=raqueta")
        return res.status_code, [p["productoId"] for p in res.get_json()]

    with ThreadPoolExecutor(max_workers=5) as executor:
        futuros = [executor.submit(listar, i) for i in range(10)]
        resultados = [f.result() for f in as_completed(futuros)]

    assert all(estado == 200 and ids == [producto_id] for estado, ids in resultados)


def test_creaciones_concurrentes(app, producto_id):
    categoria_id = Categoria.query.filter_by(nombre="Tenis").first().id

    def crear(i):
        datos = {"nombre": f"Pelota {i}", "precio": 10 + i, "categoriaId": categoria_id}
        return app.test_client().post("/api/productos", json=datos).status_code

    with ThreadPoolExecutor(max_workers=5) as executor:
        estados = list(executor.map(crear, range(5)))

    assert estados == [201] * 5
    assert Producto.query.count() == 6
