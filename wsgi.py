"""WSGI entry point for the task service."""

import os

from app import create_app
from config import load_port

app = create_app(os.getenv("FLASK_ENV", "production"))

if __name__ == "__main__":
    app.run(host=os.getenv("APP_HOST", "0.0.0.0"), port=load_port())
