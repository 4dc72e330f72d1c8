from flask import Flask
from flask_cors import CORS

from maiwayoverlay.config import config

# Import Blueprints
from overlay import overlay_bp


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)

    # Register Blueprints
    app.register_blueprint(overlay_bp, url_prefix='/overlay')

    @app.route('/')
    def index():
        return "MaiWay Overlay is running!"

    return app


app = create_app()

if __name__ == '__main__':
    api = config.get_api_config()
    print(f"\n🗺️  Overlay backend running at: http://{api['host']}:{api['port']}\n")
    app.run(**api)
