"""
External API Routes - proxy for the upstream partner posts service.
"""
from flask import Blueprint, abort, jsonify

from api.pipeline import RequestContext, create_route_handler
from services.external_items import ExternalItemsClient, ExternalItemsError


def create_external_blueprint(client: ExternalItemsClient) -> Blueprint:
    external_bp = Blueprint('external', __name__)

    def get_external_items(ctx: RequestContext):
        """Relay the upstream payload unchanged; upstream failures become 502."""
        try:
            data = client.fetch_items()
        except ExternalItemsError as e:
            abort(502, description=str(e))
        return jsonify(data), 200

    external_bp.add_url_rule(
        "/items",
        view_func=create_route_handler().handle(get_external_items),
        methods=["GET"],
    )
    return external_bp
