# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

"""
Property key tables shared by every layer.

Vendor keys live under ``okta.oauth2.``; standard keys follow the generic
OAuth2 client / resource-server schema under ``security.oauth2.``.
"""

from enum import StrEnum

VENDOR_PREFIX = "okta.oauth2."
REGISTRATION_ID = "okta"

_REGISTRATION = f"security.oauth2.client.registration.{REGISTRATION_ID}."
_PROVIDER = f"security.oauth2.client.provider.{REGISTRATION_ID}."
_RESOURCE_SERVER = "security.oauth2.resourceserver."


class VendorKey(StrEnum):
    ISSUER = VENDOR_PREFIX + "issuer"
    ISSUER_WITH_PATH = VENDOR_PREFIX + "issuer-with-path"
    CLIENT_ID = VENDOR_PREFIX + "client-id"
    CLIENT_SECRET = VENDOR_PREFIX + "client-secret"
    # string or list
    SCOPES = VENDOR_PREFIX + "scopes"
    REDIRECT_URI = VENDOR_PREFIX + "redirect-uri"


class StandardKey(StrEnum):
    CLIENT_ID = _REGISTRATION + "client-id"
    CLIENT_SECRET = _REGISTRATION + "client-secret"
    SCOPE = _REGISTRATION + "scope"
    REDIRECT_URI = _REGISTRATION + "redirect-uri"
    CLIENT_AUTHENTICATION_METHOD = _REGISTRATION + "client-authentication-method"

    AUTHORIZATION_URI = _PROVIDER + "authorization-uri"
    TOKEN_URI = _PROVIDER + "token-uri"
    USER_INFO_URI = _PROVIDER + "user-info-uri"
    JWK_SET_URI = _PROVIDER + "jwk-set-uri"
    ISSUER_URI = _PROVIDER + "issuer-uri"

    JWT_ISSUER_URI = _RESOURCE_SERVER + "jwt.issuer-uri"
    JWT_JWK_SET_URI = _RESOURCE_SERVER + "jwt.jwk-set-uri"

    OPAQUE_TOKEN_CLIENT_ID = _RESOURCE_SERVER + "opaque-token.client-id"
    OPAQUE_TOKEN_CLIENT_SECRET = _RESOURCE_SERVER + "opaque-token.client-secret"
    OPAQUE_TOKEN_INTROSPECTION_URI = _RESOURCE_SERVER + "opaque-token.introspection-uri"


BASE_URL_PLACEHOLDER = "{baseUrl}"


def placeholder(key: str) -> str:
    """
    Returns a ``${key}`` reference, left for the consumer's templating engine to resolve.
    """
    return "${" + key + "}"
