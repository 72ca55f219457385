"""
Item API Routes

Provides endpoints for:
- Listing the caller's items
- Creating an item
- Fetching a single item

All routes require an authenticated user.
"""
from flask import Blueprint, abort, jsonify

from api.models import CreateItemBody, ItemParams, ListItemsQuery
from api.pipeline import AuthenticationService, RequestContext, create_route_handler
from services.item_store import ItemStore


def create_items_blueprint(item_store: ItemStore, auth_service: AuthenticationService) -> Blueprint:
    """Build the /api/items blueprint around the given store and auth service."""
    items_bp = Blueprint('items', __name__)
    authorized = create_route_handler().authorize(auth_service)

    def list_items(ctx: RequestContext):
        """
        List items owned by the caller.

        Query params:
            - limit: Max results, 1-100 (optional)
        """
        items = item_store.list_for_user(ctx.user.id, limit=ctx.query.limit)
        return jsonify({"items": [item.to_dict() for item in items]}), 200

    def create_item(ctx: RequestContext):
        """Create an item owned by the caller."""
        body: CreateItemBody = ctx.body
        item = item_store.add(
            user_id=ctx.user.id,
            name=body.name,
            price=body.price,
            description=body.description,
        )
        return jsonify({"item": item.to_dict()}), 201

    def get_item(ctx: RequestContext):
        """Fetch one item; other users' items are reported as missing."""
        item = item_store.get(str(ctx.params.item_id))
        if item is None or item.user_id != ctx.user.id:
            abort(404, description="Item not found")
        return jsonify({"item": item.to_dict()}), 200

    items_bp.add_url_rule(
        "",
        view_func=authorized.validate_query(ListItemsQuery).handle(list_items),
        methods=["GET"],
    )
    items_bp.add_url_rule(
        "",
        view_func=authorized.validate_body(CreateItemBody).handle(create_item),
        methods=["POST"],
    )
    items_bp.add_url_rule(
        "/<item_id>",
        view_func=authorized.validate_params(ItemParams).handle(get_item),
        methods=["GET"],
    )

    return items_bp
