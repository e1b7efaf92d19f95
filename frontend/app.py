# frontend/app.py

import logging

from flask import Flask, render_template

from backend.config import load_game_config
from frontend.api import api_blueprint


def create_app(config_path: str = None) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config["GAME_CONFIG"] = load_game_config(config_path)
    app.register_blueprint(api_blueprint, url_prefix="/api")

    @app.route("/")
    def index():
        return render_template("index.html")

    return app


def main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default=None, help="Path to game config yaml")
    parser.add_argument("--port", type=int, default=None, help="Port to run the server on")
    parser.add_argument("--host", type=str, default=None, help="Host IP")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = create_app(args.config)
    server = app.config["GAME_CONFIG"].get("server", {})
    host = args.host or server.get("host", "127.0.0.1")
    port = args.port or server.get("port", 5000)

    print(f"Running on http://{host}:{port}/")
    app.run(debug=args.debug, host=host, port=port)


if __name__ == "__main__":
    main()
