import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, jsonify
from flask_cors import CORS
from src.config import Config
from src.extensions import db, migrate
from src.logger import get_logger, set_level

# register blueprints dynamically
from routes import register_routes

logger = get_logger("App")


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.url_map.strict_slashes = False
    set_level(app.config.get("LOG_LEVEL", "INFO"))

    CORS(app, origins=app.config.get("CORS_ORIGINS", "*"), methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"])

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        from store.record import Record
        db.create_all()

        if app.config.get("SEED_DEMO_DATA"):
            from store.record_store import get_record_store
            from store.seed import seed_demo_data
            seed_demo_data(get_record_store())

    # register routes/blueprints
    register_routes(app)

    @app.get("/")
    def index():
        return jsonify({"message": "Billing API"}), 200

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    logger.info("App created with database %s", app.config["SQLALCHEMY_DATABASE_URI"])
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
