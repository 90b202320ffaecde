import os

from flask import Flask
from flask_cors import CORS
from flask_restful import Api

from ..constants import DEFAULT_LOG_LEVEL
from .routes import init_routes
from .models import SimulatorManager


def load_config() -> dict:
    """Server settings from ORASIM_* environment variables"""
    return {
        'HOST': os.environ.get('ORASIM_HOST', '127.0.0.1'),
        'PORT': int(os.environ.get('ORASIM_PORT', '5000')),
        'DEBUG': os.environ.get('ORASIM_DEBUG', '').lower() in ('1', 'true', 'yes', 'on'),
        'LOG_LEVEL': os.environ.get('ORASIM_LOG_LEVEL', DEFAULT_LOG_LEVEL),
        'SESSION_FILE': os.environ.get('ORASIM_SESSION_FILE'),
    }


def create_app(config: dict = None):
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    CORS(app)  # Enable CORS for frontend communication
    api = Api(app)

    manager = SimulatorManager(app.config['SESSION_FILE'])
    app.extensions['orasim'] = manager

    # Initialize Routes
    init_routes(api, manager)

    return app
