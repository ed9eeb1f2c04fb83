from .categoria import Categoria
from .producto import Producto

__all__ = [
    "Categoria",
    "Producto",
]
