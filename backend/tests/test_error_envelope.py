import logging

from flask import Flask

from api.middleware import setup_error_handlers, setup_request_id_middleware
from api.middleware.request_id import get_request_id


def _build_test_app():
    app = Flask(__name__)
    setup_request_id_middleware(app)
    setup_error_handlers(app)

    @app.route("/boom")
    def boom():
        raise RuntimeError("boom")

    app.config["TESTING"] = True
    return app


def test_unhandled_error_is_500_problem(caplog):
    client = _build_test_app().test_client()

    with caplog.at_level(logging.ERROR, logger="api.middleware.error"):
        response = client.get("/boom", headers={"X-Request-ID": "req-1"})

    assert response.status_code == 500
    assert response.mimetype == "application/problem+json"
    assert response.get_json() == {
        "type": "about:blank",
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred",
        "requestId": "req-1",
    }
    assert response.headers["X-Request-ID"] == "req-1"
    assert any("Unhandled error: boom" in record.getMessage() for record in caplog.records)


def test_http_errors_keep_their_status():
    client = _build_test_app().test_client()

    response = client.get("/does-not-exist")

    assert response.status_code == 404
    data = response.get_json()
    assert data["title"] == "Not Found"
    assert data["status"] == 404
    assert "requestId" in data


def test_method_not_allowed():
    client = _build_test_app().test_client()

    response = client.post("/boom")

    assert response.status_code == 405
    assert response.get_json()["status"] == 405


def test_invalid_request_id_is_replaced():
    client = _build_test_app().test_client()

    response = client.get("/does-not-exist", headers={"X-Request-ID": "has spaces in it"})

    assert response.headers["X-Request-ID"] != "has spaces in it"
    assert response.get_json()["requestId"] == response.headers["X-Request-ID"]


def test_app_routes_share_the_envelope(app, client):
    @app.route("/api/__test/boom")
    def api_boom():
        raise ValueError("kaboom")

    response = client.get("/api/__test/boom")

    assert response.status_code == 500
    assert response.get_json()["title"] == "Internal Server Error"


def test_get_request_id_follows_the_middleware():
    app = _build_test_app()
    seen = []

    @app.route("/whoami")
    def whoami():
        seen.append(get_request_id())
        return "ok"

    with app.test_request_context("/"):
        assert get_request_id() is None

    response = app.test_client().get("/whoami", headers={"X-Request-ID": "req-42"})

    assert seen == ["req-42"]
    assert response.headers["X-Request-ID"] == "req-42"
