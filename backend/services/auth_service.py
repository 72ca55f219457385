"""
Authentication services - resolve the caller of a request.

Every service implements `get_user(request) -> Optional[UserSession]`, the
capability consumed by `create_route_handler().authorize(...)`.

Services:
- RequestUserAuthenticationService: user bound to flask.g by upstream middleware
- JwtAuthenticationService: `Authorization: Bearer <jwt>` signed with Config.JWT_SECRET
- StaticAuthenticationService: fixed user, for tests and local development
"""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from flask import Request, g

from config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSession:
    id: str
    username: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RequestUserAuthenticationService:
    """Returns the user an upstream middleware stored on `g.user`, if any."""

    def get_user(self, req: Request) -> Optional[UserSession]:
        user = getattr(g, 'user', None)
        return user if isinstance(user, UserSession) else None


class JwtAuthenticationService:
    """
    Bearer-token authentication.

    Tokens carry the session in the `sub`, `username` and `email` claims.
    Missing headers, bad signatures, expired tokens and incomplete claims
    all resolve to None; the route pipeline turns that into a 401.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expiration_hours: Optional[int] = None,
    ):
        self.secret = secret or Config.JWT_SECRET
        self.algorithm = algorithm or Config.JWT_ALGORITHM
        self.expiration_hours = expiration_hours or Config.JWT_EXPIRATION_HOURS

    def issue_token(self, user: UserSession, expires_in: Optional[timedelta] = None) -> str:
        """Generate JWT token for user"""
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user.id,
            'username': user.username,
            'email': user.email,
            'iat': now,
            'exp': now + (expires_in or timedelta(hours=self.expiration_hours)),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def get_user(self, req: Request) -> Optional[UserSession]:
        auth_header = req.headers.get('Authorization', '')
        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header[len('Bearer '):].strip()
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {e}")
            return None

        try:
            return UserSession(
                id=str(payload['sub']),
                username=payload['username'],
                email=payload['email'],
            )
        except KeyError as e:
            logger.debug(f"Token missing claim {e}")
            return None


DEFAULT_TEST_USER = UserSession(
    id='test-user-id',
    username='testuser',
    email='test@test.com',
)


class StaticAuthenticationService:
    """Always returns the configured user (None means "nobody logged in")."""

    def __init__(self, user: Optional[UserSession] = DEFAULT_TEST_USER):
        self.user = user

    def get_user(self, req: Request) -> Optional[UserSession]:
        return self.user

    def set_user(self, **fields: Any) -> None:
        base = self.user or DEFAULT_TEST_USER
        self.user = replace(base, **fields)

    def reset_user(self) -> None:
        self.user = DEFAULT_TEST_USER
