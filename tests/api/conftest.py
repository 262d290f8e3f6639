"""Fixtures for API tests."""

import falcon.asgi
import pytest

from smaccess.main import add_routes


class AuthBypassMiddleware:
    """Middleware that sets context.current to whatever the test assigns."""

    def __init__(self) -> None:
        self.current = None

    async def process_request(self, req, resp):
        req.context.current = self.current


@pytest.fixture
def auth() -> AuthBypassMiddleware:
    return AuthBypassMiddleware()


@pytest.fixture
def app(uow_factory, auth):
    """Falcon ASGI app with API resources for testing."""
    app = falcon.asgi.App(middleware=[auth])
    add_routes(app, uow_factory)
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
