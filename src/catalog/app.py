from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from catalog.config import config
from catalog.product import ProductRepository, build_repository


def create_app(repository: ProductRepository = None) -> Flask:
    """Application factory.

    The product repository is injected here; when omitted it is built
    from configuration.
    """
    app = Flask(__name__)
    app.logger.setLevel(config.log_level)

    if repository is None:
        repository = build_repository(config)
    app.product_repository = repository

    # Register blueprints
    from catalog.api.products import bp as products_bp

    app.register_blueprint(products_bp, url_prefix="/api/products")

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    app.logger.info(
        "Catalog started with %s storage", type(app.product_repository).__name__
    )
    return app
