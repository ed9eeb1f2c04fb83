# Modelo Producto con relación obligatoria a Categoria
from tienda_deportiva.dtos import precio_a_json
from tienda_deportiva.extensions import db


class Producto(db.Model):
    __tablename__ = "productos"

    # Atributos principales
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    nombre = db.Column(db.String(150), nullable=False)
    descripcion = db.Column(db.Text)
    precio = db.Column(db.Numeric(10, 2), nullable=False)
    imagen_url = db.Column(db.String(250))

    # Relaciones
    categoria_id = db.Column(
        db.Integer,
        db.ForeignKey("categorias.id", ondelete="RESTRICT"),
        nullable=False
    )
    categoria = db.relationship("Categoria", back_populates="productos")

    # Versión de fila para concurrencia optimista
    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # Representación almacenada (sin la categoría expandida)
    def to_dict(self):
        return {
            "productoId": self.id,
            "nombre": self.nombre,
            "descripcion": self.descripcion,
            "precio": precio_a_json(self.precio),
            "imagenUrl": self.imagen_url,
            "categoriaId": self.categoria_id
        }

    def __repr__(self):
        return (
            f"<Producto(id={self.id}, nombre={self.nombre!r}, precio={self.precio}, "
            f"categoria_id={self.categoria_id}, version={self.version})>"
        )
