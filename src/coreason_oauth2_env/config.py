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
Configuration for the coreason-oauth2-env package.
"""

from typing import Any

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from coreason_oauth2_env.keys import VendorKey
from coreason_oauth2_env.layers import StaticLayer
from coreason_oauth2_env.models import IssuerStyle


class MapperSettings(BaseSettings):
    """
    Tunables of the property mapper itself.

    Attributes:
        http_timeout (float): Timeout in seconds for the discovery request.
        default_scopes (tuple[str, ...]): Scopes requested when none are configured.
        pkce_client_authentication_method (str): Method hinted to public (secret-less) clients.
        default_client_authentication_method (str): Method used when the issuer rejects the PKCE hint.
        issuer_styles (dict[str, IssuerStyle]): Host suffix to issuer style table. Hosts matching
            no entry are STANDARD.
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_OAUTH2_",
        case_sensitive=False,
    )

    http_timeout: float = Field(default=5.0, gt=0, description="Timeout in seconds for the discovery request.")
    default_scopes: tuple[str, ...] = ("openid", "profile", "email")
    pkce_client_authentication_method: str = "none"
    default_client_authentication_method: str = "client_secret_basic"
    issuer_styles: dict[str, IssuerStyle] = Field(default_factory=lambda: {"auth0.com": IssuerStyle.VERBATIM})

    @field_validator("default_scopes", mode="after")
    @classmethod
    def deduplicate_scopes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """
        Strips blanks and drops repeated scopes, keeping first occurrences in order.
        """
        return tuple(dict.fromkeys(s.strip() for s in v if s.strip()))

    @field_validator("issuer_styles", mode="after")
    @classmethod
    def normalize_hosts(cls, v: dict[str, IssuerStyle]) -> dict[str, IssuerStyle]:
        return {host.strip().lower().lstrip("."): style for host, style in v.items()}


class VendorSettings(BaseSettings):
    """
    Vendor (``okta.oauth2.*``) keys read from the process environment.

    Attributes:
        issuer (str | None): The issuer URL (e.g. https://dev-123.okta.com/oauth2/default).
        client_id (str | None): The OAuth2 client id.
        client_secret (SecretStr | None): The OAuth2 client secret. Absent for public (PKCE) clients.
        scopes (str | list[str] | None): Comma-separated string or list of scopes.
        redirect_uri (str | None): Redirect path relative to the application's base URL.
    """

    model_config = SettingsConfigDict(
        env_prefix="OKTA_OAUTH2_",
        case_sensitive=False,
    )

    unsafe_local_dev: bool = False
    issuer: str | None = None
    client_id: str | None = None
    client_secret: SecretStr | None = None
    scopes: str | list[str] | None = None
    redirect_uri: str | None = None

    @field_validator("issuer", mode="after")
    @classmethod
    def validate_https(cls, v: str | None, info: ValidationInfo) -> str | None:
        """
        Ensures that issuer uses HTTPS, unless strictly opted out for local dev.
        """
        if v and v.startswith("http://") and not info.data.get("unsafe_local_dev", False):
            raise ValueError("HTTPS is required for production. Set 'unsafe_local_dev=True' only for local testing.")
        return v

    def as_layer(self, name: str = "okta-environment") -> StaticLayer:
        """
        Exposes the configured vendor keys as a layer. Unset fields are left out so they
        remain absent to the chain.

        Args:
            name: The layer name.

        Returns:
            StaticLayer: The vendor keys that have a value.
        """
        values: dict[str, Any] = {
            VendorKey.ISSUER: self.issuer,
            VendorKey.CLIENT_ID: self.client_id,
            VendorKey.CLIENT_SECRET: self.client_secret.get_secret_value() if self.client_secret else None,
            VendorKey.SCOPES: self.scopes,
            VendorKey.REDIRECT_URI: self.redirect_uri,
        }
        return StaticLayer(name, {k: v for k, v in values.items() if v is not None})
