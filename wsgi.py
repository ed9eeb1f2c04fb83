"""
Tienda Deportiva - punto de entrada WSGI
"""
from tienda_deportiva.main import create_app

# Crear instancia de la app para gunicorn / flask run
app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
