from uuid import UUID

from flask import Blueprint, current_app, jsonify, request, url_for

from catalog.product import ProductPayload, ValidationError, WriteOutcome
from catalog.product.model import parse_version

bp = Blueprint("products", __name__)


def _repository():
    return current_app.product_repository


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


@bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({"error": str(e)}), 400


@bp.route("", methods=["GET"])
def list_products():
    """List all products."""
    products = _repository().list()
    if products is None:
        return jsonify({"error": "No products available"}), 404
    return jsonify([p.to_dict() for p in products])


@bp.route("/<uuid:product_id>", methods=["GET"])
def get_product(product_id: UUID):
    """Get product by ID."""
    product = _repository().get_by_id(product_id)
    if not product:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(product.to_dict())


@bp.route("", methods=["POST"])
def create_product():
    """Create a new product."""
    payload = ProductPayload.from_json(_json_body())

    product = _repository().add(payload)
    current_app.logger.info("Created product %s", product.id)

    response = jsonify(product.to_dict())
    response.headers["Location"] = url_for("products.get_product", product_id=product.id)
    return response, 201


@bp.route("/<uuid:product_id>", methods=["PUT"])
def update_product(product_id: UUID):
    """Replace the title, description, price and quantity of a product."""
    data = _json_body()

    try:
        body_id = UUID(str(data.get("id")))
    except ValueError:
        body_id = None
    if body_id != product_id:
        return jsonify({"error": "Product id in body does not match the URL"}), 400

    payload = ProductPayload.from_json(data)
    expected_version = parse_version(data)

    outcome = _repository().update(product_id, payload, expected_version)

    if outcome is WriteOutcome.NOT_FOUND:
        current_app.logger.warning("Update of missing product %s", product_id)
        return jsonify({"error": "Product not found"}), 404
    if outcome is WriteOutcome.CONFLICT:
        current_app.logger.warning(
            "Update of product %s conflicted with a concurrent change", product_id
        )
        return jsonify({"error": "Product was modified concurrently"}), 400

    current_app.logger.info("Updated product %s", product_id)
    return "", 204


@bp.route("/<uuid:product_id>", methods=["DELETE"])
def delete_product(product_id: UUID):
    """Delete a product by ID."""
    outcome = _repository().delete(product_id)

    if outcome is WriteOutcome.NOT_FOUND:
        current_app.logger.warning("Delete of missing product %s", product_id)
        return jsonify({"error": "Product not found"}), 404
    if outcome is not WriteOutcome.APPLIED:
        current_app.logger.warning("Delete of product %s reported %s", product_id, outcome)
        return jsonify({"error": "Product could not be deleted"}), 400

    current_app.logger.info("Deleted product %s", product_id)
    return "", 204
