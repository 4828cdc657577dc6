import logging
import os

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from .config import DevConfig, ProdConfig
from .exceptions import MiSaludError
from .models import db
from .routes import (
    auth_bp,
    perfil_bp,
    dashboard_bp,
    citas_bp,
    medicamentos_bp,
    salud_bp,
    chatbot_bp,
)

logger = logging.getLogger(__name__)


def create_app(config=None):
    app = Flask(__name__)

    if config is None:
        env = os.getenv("FLASK_ENV", "development")
        config = ProdConfig if env == "production" else DevConfig
    if isinstance(config, dict):
        app.config.from_object(DevConfig)
        app.config.update(config)
    else:
        app.config.from_object(config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db.init_app(app)
    with app.app_context():
        db.create_all()

    # BLUEPRINTS
    app.register_blueprint(auth_bp)
    app.register_blueprint(perfil_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(citas_bp)
    app.register_blueprint(medicamentos_bp)
    app.register_blueprint(salud_bp)
    app.register_blueprint(chatbot_bp)

    # ---------------------------- ERRORES ----------------------------
    @app.errorhandler(MiSaludError)
    def handle_misalud_error(error):
        db.session.rollback()
        logger.info("%s: %s", error.code, error.message)
        return error.to_dict(), error.status

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(error):
        db.session.rollback()
        logger.exception("Error de base de datos")
        return MiSaludError().to_dict(), 500

    return app


if __name__ == "__main__":
    create_app().run()
