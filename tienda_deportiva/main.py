from decimal import Decimal

from flask import Flask, jsonify

from tienda_deportiva.config import get_config
from tienda_deportiva.errores import registrar_manejadores
from tienda_deportiva.extensions import db, cors
from tienda_deportiva.logs import configurar_logger, logger


def create_app(config_name=None, **ajustes):
    app = Flask(__name__)

    # Cargar configuración; los ajustes explícitos tienen prioridad
    app.config.from_object(get_config(config_name))
    app.config.update(ajustes)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL debe estar definida en el entorno")

    configurar_logger(app.config["LOG_LEVEL"])

    # Inicializar extensiones
    db.init_app(app)

    origenes = app.config["CORS_ORIGINS"]
    if origenes:
        cors.init_app(app, resources={r"/api/*": {
            "origins": origenes,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"]
        }})

    # Registrar blueprints
    from tienda_deportiva.routes.categoria import categoria_bp
    from tienda_deportiva.routes.producto import producto_bp

    app.register_blueprint(categoria_bp)
    app.register_blueprint(producto_bp)

    # Documentación interactiva solo en desarrollo
    if app.config["SWAGGER_UI"]:
        from tienda_deportiva.docs import registrar_documentacion
        registrar_documentacion(app)

    registrar_manejadores(app)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.cli.command("create-db")
    def create_db():
        db.create_all()
        print("✅ Base de datos creada correctamente.")

    @app.cli.command("seed-db")
    def seed_db():
        db.create_all()
        if cargar_datos_demo():
            print("✅ Catálogo de demostración cargado.")
        else:
            print("El catálogo ya tiene datos; no se cargó nada.")

    logger.info(f"[create_app] Aplicación creada (config={get_config(config_name).__name__})")
    return app


def cargar_datos_demo():
    """Carga un catálogo pequeño si la base está vacía. Devuelve True si cargó algo."""
    from tienda_deportiva.models import Categoria, Producto

    if Categoria.query.first():
        return False

    futbol = Categoria(nombre="Futbol")
    running = Categoria(nombre="Running")
    natacion = Categoria(nombre="Natacion")
    db.session.add_all([futbol, running, natacion])
    db.session.flush()

    productos = [
        Producto(nombre="Balón profesional", descripcion="Balón talla 5 cosido a mano",
                 precio=Decimal("89.90"), categoria_id=futbol.id),
        Producto(nombre="Botines de césped", descripcion="Tacos para pasto natural",
                 precio=Decimal("249.00"), categoria_id=futbol.id),
        Producto(nombre="Canilleras", descripcion=None,
                 precio=Decimal("35.50"), categoria_id=futbol.id),
        Producto(nombre="Zapatillas de running", descripcion="Amortiguación para larga distancia",
                 precio=Decimal("399.99"), categoria_id=running.id),
        Producto(nombre="Reloj GPS", descripcion="Mide ritmo y distancia",
                 precio=Decimal("799.00"), categoria_id=running.id),
        Producto(nombre="Lentes de natación", descripcion="Antiempañante",
                 precio=Decimal("45.00"), categoria_id=natacion.id),
        Producto(nombre="Gorro de silicona", descripcion=None,
                 precio=Decimal("25.00"), categoria_id=natacion.id),
    ]
    db.session.add_all(productos)
    db.session.commit()
    logger.info(f"[cargar_datos_demo] {len(productos)} productos de demostración creados")
    return True
