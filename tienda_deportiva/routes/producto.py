from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import Blueprint, request, jsonify, url_for, current_app
from sqlalchemy.orm.exc import StaleDataError

from tienda_deportiva import consultas
from tienda_deportiva.errores import ErrorEntrada
from tienda_deportiva.extensions import db
from tienda_deportiva.logs import logger
from tienda_deportiva.models import Categoria, Producto

producto_bp = Blueprint('producto', __name__, url_prefix='/api/productos')

MAX_NOMBRE = 150
MAX_IMAGEN_URL = 250
CENTIMOS = Decimal('0.01')
# Numeric(10, 2): ocho dígitos enteros
PRECIO_MAXIMO = Decimal('100000000')


def _leer_precio(valor, errores):
    if isinstance(valor, bool) or not isinstance(valor, (int, float, str)):
        errores['precio'] = 'El precio es obligatorio y debe ser numérico'
        return None
    try:
        precio = Decimal(str(valor))
        if not precio.is_finite():
            raise InvalidOperation(valor)
        precio = precio.quantize(CENTIMOS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        errores['precio'] = 'El precio debe ser un número decimal válido'
        return None
    if abs(precio) >= PRECIO_MAXIMO:
        errores['precio'] = 'El precio excede el máximo permitido'
        return None
    return precio


def _leer_texto_opcional(datos, clave, maximo, errores):
    valor = datos.get(clave)
    if valor is None:
        return None
    if not isinstance(valor, str):
        errores[clave] = 'Debe ser un texto'
    elif maximo is not None and len(valor) > maximo:
        errores[clave] = f'Admite como máximo {maximo} caracteres'
    return valor


def _leer_producto(datos):
    """Valida el cuerpo de un producto y devuelve los campos del modelo."""
    if not isinstance(datos, dict):
        raise ErrorEntrada('El cuerpo de la petición debe ser un objeto JSON')

    errores = {}

    nombre = datos.get('nombre')
    if not isinstance(nombre, str) or not nombre.strip():
        errores['nombre'] = 'El nombre es obligatorio'
    elif len(nombre) > MAX_NOMBRE:
        errores['nombre'] = f'Admite como máximo {MAX_NOMBRE} caracteres'

    descripcion = _leer_texto_opcional(datos, 'descripcion', None, errores)
    imagen_url = _leer_texto_opcional(datos, 'imagenUrl', MAX_IMAGEN_URL, errores)
    precio = _leer_precio(datos.get('precio'), errores)

    categoria_id = datos.get('categoriaId')
    if isinstance(categoria_id, bool) or not isinstance(categoria_id, int):
        errores['categoriaId'] = 'La categoría es obligatoria y debe ser un entero'
    elif db.session.get(Categoria, categoria_id) is None:
        errores['categoriaId'] = f'La categoría {categoria_id} no existe'

    if errores:
        raise ErrorEntrada('Datos de producto inválidos', errores)

    return {
        'nombre': nombre,
        'descripcion': descripcion,
        'precio': precio,
        'imagen_url': imagen_url,
        'categoria_id': categoria_id
    }


def _confirmar_cambios(producto_id):
    """Confirma la transacción.

    Devuelve False si el producto desapareció mientras tanto; si sigue
    existiendo, el conflicto de concurrencia se propaga al llamador.
    """
    try:
        db.session.commit()
    except StaleDataError:
        db.session.rollback()
        if not consultas.producto_existe(producto_id):
            return False
        logger.error(f"[_confirmar_cambios] Conflicto de concurrencia en producto {producto_id}")
        raise
    return True


def _no_encontrado(funcion, producto_id):
    logger.warning(f"[{funcion}] Producto {producto_id} no encontrado")
    return jsonify({'msg': 'Producto no encontrado'}), 404


@producto_bp.route('', methods=['GET'])
def listar_productos():
    """Lista productos filtrando por texto (buscar) y categorías (categorias).
    ---
    tags:
      - productos
    parameters:
      - name: buscar
        in: query
        type: string
        description: Texto buscado en nombre, descripción o categoría
      - name: categorias
        in: query
        type: array
        items:
          type: string
        collectionFormat: multi
        description: Nombres exactos de categoría (repetible)
    responses:
      200:
        description: Productos ordenados por id
        schema:
          type: array
          items:
            $ref: '#/definitions/ProductoView'
    """
    buscar = request.args.get('buscar')
    categorias = request.args.getlist('categorias')
    productos = list(consultas.listar_productos(buscar, categorias))
    logger.info(f"[listar_productos] buscar={buscar!r} categorias={categorias} -> {len(productos)} productos")
    return jsonify(productos), 200


@producto_bp.route('/aleatorios', methods=['GET'])
def listar_productos_aleatorios():
    """Devuelve una muestra aleatoria de productos.
    ---
    tags:
      - productos
    responses:
      200:
        description: Hasta seis productos en orden aleatorio
        schema:
          type: array
          items:
            $ref: '#/definitions/ProductoView'
    """
    productos = consultas.muestra_aleatoria(current_app.config['LIMITE_ALEATORIOS'])
    logger.info(f"[listar_productos_aleatorios] {len(productos)} productos")
    return jsonify(productos), 200


@producto_bp.route('/<int:producto_id>', methods=['GET'])
def obtener_producto(producto_id):
    """Obtiene un producto por id con su categoría.
    ---
    tags:
      - productos
    parameters:
      - name: producto_id
        in: path
        type: integer
        required: true
    responses:
      200:
        description: Producto con su categoría
        schema:
          $ref: '#/definitions/ProductoView'
      404:
        description: Producto no encontrado
    """
    producto = consultas.obtener_producto(producto_id)
    if producto is None:
        return _no_encontrado('obtener_producto', producto_id)
    return jsonify(producto), 200


@producto_bp.route('', methods=['POST'])
def crear_producto():
    """Crea un producto; el productoId del cuerpo se ignora.
    ---
    tags:
      - productos
    parameters:
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/Producto'
    responses:
      201:
        description: Producto creado
        schema:
          $ref: '#/definitions/Producto'
      400:
        description: Datos inválidos
    """
    campos = _leer_producto(request.get_json(silent=True))
    producto = Producto(**campos)
    db.session.add(producto)
    db.session.commit()
    logger.info(f"[crear_producto] Producto creado con ID: {producto.id}")
    ubicacion = url_for('producto.obtener_producto', producto_id=producto.id)
    return jsonify(producto.to_dict()), 201, {'Location': ubicacion}


@producto_bp.route('/<int:producto_id>', methods=['PUT'])
def actualizar_producto(producto_id):
    """Reemplaza por completo un producto existente.
    ---
    tags:
      - productos
    parameters:
      - name: producto_id
        in: path
        type: integer
        required: true
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/Producto'
    responses:
      204:
        description: Producto actualizado
      400:
        description: Datos inválidos o id distinto al de la ruta
      404:
        description: Producto no encontrado
      409:
        description: Conflicto de concurrencia
    """
    datos = request.get_json(silent=True)
    if not isinstance(datos, dict):
        raise ErrorEntrada('El cuerpo de la petición debe ser un objeto JSON')

    id_cuerpo = datos.get('productoId')
    if isinstance(id_cuerpo, bool) or id_cuerpo != producto_id:
        logger.warning(f"[actualizar_producto] Id de ruta {producto_id} distinto del cuerpo {id_cuerpo!r}")
        return jsonify({'msg': 'El id de la ruta no coincide con el productoId del cuerpo'}), 400

    campos = _leer_producto(datos)

    producto = db.session.get(Producto, producto_id)
    if producto is None:
        return _no_encontrado('actualizar_producto', producto_id)

    for campo, valor in campos.items():
        setattr(producto, campo, valor)

    if not _confirmar_cambios(producto_id):
        return _no_encontrado('actualizar_producto', producto_id)

    logger.info(f"[actualizar_producto] Producto {producto_id} actualizado")
    return '', 204


@producto_bp.route('/<int:producto_id>', methods=['DELETE'])
def eliminar_producto(producto_id):
    """Elimina un producto.
    ---
    tags:
      - productos
    parameters:
      - name: producto_id
        in: path
        type: integer
        required: true
    responses:
      204:
        description: Producto eliminado
      404:
        description: Producto no encontrado
    """
    producto = db.session.get(Producto, producto_id)
    if producto is None:
        return _no_encontrado('eliminar_producto', producto_id)

    db.session.delete(producto)
    if not _confirmar_cambios(producto_id):
        return _no_encontrado('eliminar_producto', producto_id)

    logger.info(f"[eliminar_producto] Producto {producto_id} eliminado")
    return '', 204
