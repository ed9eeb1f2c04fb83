# Definición del modelo Categoria
from tienda_deportiva.extensions import db


class Categoria(db.Model):
    __tablename__ = "categorias"

    # Columnas de la tabla
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    nombre = db.Column(db.String(100), unique=True, nullable=False)

    # Relación con productos: se consulta bajo demanda y el borrado nunca
    # toca a los hijos; la clave foránea RESTRICT rechaza la operación
    productos = db.relationship(
        "Producto",
        back_populates="categoria",
        lazy="dynamic",
        passive_deletes="all"
    )

    def __repr__(self):
        return f"<Categoria(id={self.id}, nombre={self.nombre!r})>"
