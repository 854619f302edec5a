import locale
import logging
import os

from flask import Flask, send_from_directory

from App.Config import Config
from App.Routes.Auth.auth import auth_bp, init_user_store
from App.Routes.Context import init_planner
from App.Routes.Destinations.destination import destinations_bp
from App.Routes.Favorite.favorite import favorites_bp
from App.Routes.Guides.guide import guides_bp
from App.Routes.History.history import history_bp
from App.Routes.Itinerary.itinerary import itinerary_bp
from App.Routes.Models.Database import db
from App.Routes.Preferences.preference import preferences_bp
from App.Routes.Storage.storage import storage_bp
from App.Routes.Weather.weather import weather_bp
from App.Utils.Response import error_response

logger = logging.getLogger(__name__)


def create_app(config_overrides=None, source=None):
    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Name sorting collates with the environment's locale.
    try:
        locale.setlocale(locale.LC_COLLATE, '')
    except locale.Error as e:
        logger.warning(f"Locale collation unavailable, sorting by code point: {str(e)}")

    db.init_app(app)
    init_planner(app, source=source)
    init_user_store(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(destinations_bp)
    app.register_blueprint(favorites_bp)
    app.register_blueprint(preferences_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(itinerary_bp)
    app.register_blueprint(storage_bp)
    app.register_blueprint(weather_bp)
    app.register_blueprint(guides_bp)

    static_folder = os.path.abspath(app.config['STATIC_FOLDER'])

    @app.route('/')
    def index():
        return serve_static('index.html')

    @app.route('/<path:filename>')
    def serve_static(filename):
        if not os.path.isfile(os.path.join(static_folder, filename)):
            return error_response(404, 'File not found', {'path': filename})
        return send_from_directory(static_folder, filename)

    with app.app_context():
        db.create_all()

    logger.info(f"Travel planner ready, serving static files from {static_folder}")
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=app.config['PORT'])
