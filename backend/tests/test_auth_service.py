from datetime import timedelta

import jwt
from flask import Flask, g

from services.auth_service import (
    DEFAULT_TEST_USER,
    JwtAuthenticationService,
    RequestUserAuthenticationService,
    StaticAuthenticationService,
    UserSession,
)

SECRET = "test-secret"
ANN = UserSession(id="u-1", username="ann", email="ann@example.com")


def _request_with(app, headers=None):
    return app.test_request_context("/api/user", headers=headers or {})


class TestJwtAuthenticationService:
    def setup_method(self):
        self.app = Flask(__name__)
        self.service = JwtAuthenticationService(secret=SECRET, algorithm="HS256", expiration_hours=1)

    def test_round_trip(self):
        token = self.service.issue_token(ANN)
        with _request_with(self.app, {"Authorization": f"Bearer {token}"}) as ctx:
            assert self.service.get_user(ctx.request) == ANN

    def test_missing_header(self):
        with _request_with(self.app) as ctx:
            assert self.service.get_user(ctx.request) is None

    def test_non_bearer_scheme(self):
        with _request_with(self.app, {"Authorization": "Basic YTpi"}) as ctx:
            assert self.service.get_user(ctx.request) is None

    def test_expired_token(self):
        token = self.service.issue_token(ANN, expires_in=timedelta(seconds=-5))
        with _request_with(self.app, {"Authorization": f"Bearer {token}"}) as ctx:
            assert self.service.get_user(ctx.request) is None

    def test_wrong_signature(self):
        token = JwtAuthenticationService(secret="other-secret").issue_token(ANN)
        with _request_with(self.app, {"Authorization": f"Bearer {token}"}) as ctx:
            assert self.service.get_user(ctx.request) is None

    def test_garbage_token(self):
        with _request_with(self.app, {"Authorization": "Bearer not.a.jwt"}) as ctx:
            assert self.service.get_user(ctx.request) is None

    def test_missing_claims(self):
        token = jwt.encode({"sub": "u-1"}, SECRET, algorithm="HS256")
        with _request_with(self.app, {"Authorization": f"Bearer {token}"}) as ctx:
            assert self.service.get_user(ctx.request) is None


class TestRequestUserAuthenticationService:
    def test_reads_user_from_g(self):
        app = Flask(__name__)
        service = RequestUserAuthenticationService()
        with _request_with(app) as ctx:
            assert service.get_user(ctx.request) is None
            g.user = ANN
            assert service.get_user(ctx.request) == ANN

    def test_ignores_foreign_objects(self):
        app = Flask(__name__)
        with _request_with(app) as ctx:
            g.user = {"id": "u-1"}
            assert RequestUserAuthenticationService().get_user(ctx.request) is None


class TestStaticAuthenticationService:
    def test_default_user(self):
        assert StaticAuthenticationService().get_user(None) == DEFAULT_TEST_USER

    def test_no_user(self):
        assert StaticAuthenticationService(user=None).get_user(None) is None

    def test_set_and_reset_user(self):
        service = StaticAuthenticationService()
        service.set_user(id="mock-test-user-id", email="mockemail@test.com")

        assert service.get_user(None) == UserSession(
            id="mock-test-user-id",
            username="testuser",
            email="mockemail@test.com",
        )

        service.reset_user()
        assert service.get_user(None) == DEFAULT_TEST_USER


def test_user_session_to_dict():
    assert ANN.to_dict() == {"id": "u-1", "username": "ann", "email": "ann@example.com"}
