import os

from impact_api import create_app
from impact_api.config import DevConfig, ProdConfig

config_class = ProdConfig if os.getenv("APP_ENV", "dev").strip().lower() == "prod" else DevConfig
app = create_app(config_class)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "10000"))
    debug = os.getenv("DEBUG", "true" if config_class.DEBUG else "false").strip().lower() in {"1", "true", "yes", "on"}
    app.run(host=host, port=port, debug=debug)
