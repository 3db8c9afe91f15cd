# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

import sys
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from loguru import logger

from coreason_oauth2_env.config import MapperSettings
from coreason_oauth2_env.discovery import MetadataFetcher

OKTA_DOCUMENT: dict[str, Any] = {
    "issuer": "https://example.okta.com",
    "authorization_endpoint": "https://example.okta.com/oauth2/v1/authorize",
    "token_endpoint": "https://example.okta.com/oauth2/v1/token",
    "userinfo_endpoint": "https://example.okta.com/oauth2/v1/userinfo",
    "jwks_uri": "https://example.okta.com/oauth2/v1/keys",
    "introspection_endpoint": "https://example.okta.com/oauth2/v1/introspect",
    "token_endpoint_auth_methods_supported": ["client_secret_basic", "client_secret_post", "none"],
}

AUTH0_DOCUMENT: dict[str, Any] = {
    "issuer": "https://tenant.us.auth0.com/",
    "authorization_endpoint": "https://tenant.us.auth0.com/authorize",
    "token_endpoint": "https://tenant.us.auth0.com/oauth/token",
    "userinfo_endpoint": "https://tenant.us.auth0.com/userinfo",
    "jwks_uri": "https://tenant.us.auth0.com/.well-known/jwks.json",
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture(autouse=True)
def reset_loguru() -> Generator[None, None, None]:
    """Restores loguru's default stderr sink after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def settings() -> MapperSettings:
    return MapperSettings(http_timeout=1.0)


@pytest.fixture
def json_transport() -> Callable[[Any], RecordingTransport]:
    def factory(document: Any, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=document))

    return factory


@pytest.fixture
def failing_transport() -> Callable[[type[Exception]], RecordingTransport]:
    def factory(error: type[Exception]) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error("simulated failure", request=request)  # type: ignore[call-arg]

        return RecordingTransport(handler)

    return factory


@pytest.fixture
def okta_fetcher(settings: MapperSettings, json_transport: Callable[[Any], RecordingTransport]) -> MetadataFetcher:
    return MetadataFetcher(settings, transport=json_transport(OKTA_DOCUMENT))


@pytest.fixture
def log_messages() -> Generator[list[Any], None, None]:
    """Collects loguru messages emitted during the test."""
    messages: list[Any] = []
    handler_id = logger.add(messages.append, level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def okta_document() -> dict[str, Any]:
    return dict(OKTA_DOCUMENT)


@pytest.fixture
def auth0_document() -> dict[str, Any]:
    return dict(AUTH0_DOCUMENT)
