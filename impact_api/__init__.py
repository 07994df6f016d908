from flask import Flask
from .config import Config
from .extensions import cors, init_store


def create_app(config_class: type[Config] = Config, test_config: dict | None = None, store=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    app.json.sort_keys = False

    # Extensions
    cors.init_app(app, resources={r"/stories*": {"origins": app.config["CORS_ORIGINS"]}})

    # One store per app; raises ConfigurationError on a bad STORIES_FILE
    init_store(app, store)

    # Blueprints
    from .routes.stories_api import bp as stories_api

    app.register_blueprint(stories_api)

    return app
