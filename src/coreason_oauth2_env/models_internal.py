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
Internal data models for the coreason-oauth2-env package.
These are not exposed in the public API.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiscoveryDocument(BaseModel):
    """
    The subset of .well-known/openid-configuration consumed by the mapper.
    Every field is optional; anything else in the document is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    issuer: str | None = Field(default=None, description="The OIDC issuer URL.")
    authorization_endpoint: str | None = Field(default=None, description="The authorization endpoint URL.")
    token_endpoint: str | None = Field(default=None, description="The token endpoint URL.")
    userinfo_endpoint: str | None = Field(default=None, description="The userinfo endpoint URL.")
    jwks_uri: str | None = Field(default=None, description="The URL to the JWKS.")
    introspection_endpoint: str | None = Field(default=None, description="The token introspection endpoint URL.")
    token_endpoint_auth_methods_supported: list[str] | None = Field(
        default=None, description="Client authentication methods accepted by the token endpoint."
    )

    @field_validator("token_endpoint_auth_methods_supported", mode="before")
    @classmethod
    def tolerate_malformed_methods(cls, v: Any) -> list[str] | None:
        """
        Treats a non-list value as absent and keeps only string entries, so a bad hint
        never discards the endpoints discovered alongside it.
        """
        if not isinstance(v, list):
            return None
        return [method for method in v if isinstance(method, str)]
