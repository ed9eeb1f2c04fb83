import logging

FORMATO = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'

# Logger común a todo el servicio
logger = logging.getLogger("tienda_deportiva")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(FORMATO))
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def configurar_logger(nivel):
    logger.setLevel(nivel)
    return logger
