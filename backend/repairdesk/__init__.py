from flask import Flask
from .config import Config
from .extensions import init_extensions
from .logs import configure_logging

# blueprints
from .blueprints.main import main_bp
from .blueprints.rpc import rpc_bp
from .seeds import register_commands

def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    configure_logging(app.config.get('LOG_LEVEL', 'INFO'), app.config.get('LOG_DIR'))
    init_extensions(app)

    app.register_blueprint(main_bp)
    app.register_blueprint(rpc_bp, url_prefix="/rpc")

    register_commands(app)

    return app
