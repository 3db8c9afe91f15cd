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
Data models for the coreason-oauth2-env package.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class IssuerStyle(StrEnum):
    """
    URL convention of an issuer.

    STANDARD issuers resolve their endpoints under ``<issuer>/oauth2`` unless the
    path already carries it; VERBATIM issuers are used as-is.
    """

    STANDARD = "standard"
    VERBATIM = "verbatim"


class OIDCMetadata(BaseModel):
    """
    Summary of the issuer's discovery document, or the vendor defaults when discovery
    was skipped or failed.

    This model is frozen (immutable): every layer reading it sees the same values for
    the life of the process.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    authorization_uri: str = Field(..., description="Authorization endpoint or a ${...} template.")
    token_uri: str = Field(..., description="Token endpoint or a ${...} template.")
    user_info_uri: str = Field(..., description="Userinfo endpoint or a ${...} template.")
    jwk_set_uri: str = Field(..., description="JWKS endpoint or a ${...} template.")
    introspection_uri: str | None = Field(
        default=None, description="Introspection endpoint. None when the issuer publishes none."
    )
    default_scope: tuple[str, ...] = Field(..., description="Scopes used when none are configured.")
    client_authentication_method: str = Field(..., description="Client authentication method hint.")
    issuer_style: IssuerStyle = Field(default=IssuerStyle.STANDARD)

    @property
    def is_alternate_issuer_style(self) -> bool:
        return self.issuer_style is IssuerStyle.VERBATIM
