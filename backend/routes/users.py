"""
User API Routes
"""
from flask import Blueprint, jsonify

from api.pipeline import AuthenticationService, RequestContext, create_route_handler


def create_users_blueprint(auth_service: AuthenticationService) -> Blueprint:
    users_bp = Blueprint('users', __name__)

    def get_current_user(ctx: RequestContext):
        """Get current user info (requires authentication)"""
        return jsonify(ctx.user.to_dict()), 200

    users_bp.add_url_rule(
        "/user",
        view_func=create_route_handler().authorize(auth_service).handle(get_current_user),
        methods=["GET"],
    )
    return users_bp
