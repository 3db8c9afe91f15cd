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
Metadata discovery: fetches the issuer's discovery document once, or falls back to the
vendor defaults.
"""

from collections.abc import Mapping
from urllib.parse import urlparse

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from coreason_oauth2_env.config import MapperSettings
from coreason_oauth2_env.exceptions import DiscoveryError, DiscoveryMalformedError, DiscoveryUnreachableError
from coreason_oauth2_env.keys import VendorKey, placeholder
from coreason_oauth2_env.models import IssuerStyle, OIDCMetadata
from coreason_oauth2_env.models_internal import DiscoveryDocument
from coreason_oauth2_env.utils.deferred_log import DeferredLog

WELL_KNOWN_PATH = ".well-known/openid-configuration"


def discovery_url(issuer: str) -> str:
    """
    Builds the discovery URL, normalizing the issuer to exactly one trailing slash.
    """
    return issuer.rstrip("/") + "/" + WELL_KNOWN_PATH


def classify_issuer(issuer: str | None, styles: Mapping[str, IssuerStyle]) -> IssuerStyle:
    """
    Looks up the issuer's host in a host-suffix table.

    Args:
        issuer: The issuer URL, or None.
        styles: Host suffix (e.g. ``auth0.com``) to style. A suffix matches the host
            itself and any of its subdomains.

    Returns:
        IssuerStyle: The matching style, STANDARD when nothing matches.
    """
    if not issuer:
        return IssuerStyle.STANDARD
    host = (urlparse(issuer).hostname or "").lower()
    for suffix, style in styles.items():
        if host == suffix or host.endswith("." + suffix):
            return style
    return IssuerStyle.STANDARD


def _templates() -> dict[str, str]:
    base = placeholder(VendorKey.ISSUER_WITH_PATH)
    return {
        "authorization_uri": f"{base}/v1/authorize",
        "token_uri": f"{base}/v1/token",
        "user_info_uri": f"{base}/v1/userinfo",
        "jwk_set_uri": f"{base}/v1/keys",
        "introspection_uri": f"{base}/v1/introspect",
    }


def fallback_metadata(settings: MapperSettings, issuer: str | None = None) -> OIDCMetadata:
    """
    Vendor defaults: endpoints are templates over the deferred issuer-with-path key and
    public clients get the PKCE hint.
    """
    return OIDCMetadata(
        **_templates(),
        default_scope=settings.default_scopes,
        client_authentication_method=settings.pkce_client_authentication_method,
        issuer_style=classify_issuer(issuer, settings.issuer_styles),
    )


def metadata_from_document(document: DiscoveryDocument, issuer: str, settings: MapperSettings) -> OIDCMetadata:
    """
    Summarizes a discovery document. A missing endpoint falls back to its template;
    a missing introspection endpoint stays None.
    """
    templates = _templates()
    methods = document.token_endpoint_auth_methods_supported
    if methods is not None and settings.pkce_client_authentication_method not in methods:
        method = settings.default_client_authentication_method
    else:
        method = settings.pkce_client_authentication_method

    return OIDCMetadata(
        authorization_uri=document.authorization_endpoint or templates["authorization_uri"],
        token_uri=document.token_endpoint or templates["token_uri"],
        user_info_uri=document.userinfo_endpoint or templates["user_info_uri"],
        jwk_set_uri=document.jwks_uri or templates["jwk_set_uri"],
        introspection_uri=document.introspection_endpoint,
        default_scope=settings.default_scopes,
        client_authentication_method=method,
        issuer_style=classify_issuer(document.issuer or issuer, settings.issuer_styles),
    )


class MetadataFetcher:
    """
    Resolves OIDCMetadata for an issuer with at most one blocking request.

    Attributes:
        settings (MapperSettings): Timeout, default scopes and issuer style table.
        log (DeferredLog): Sink for warnings emitted before logging is configured.
    """

    def __init__(
        self,
        settings: MapperSettings | None = None,
        log: DeferredLog | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the MetadataFetcher.

        Args:
            settings: Mapper settings. Defaults to ``MapperSettings()`` read from the environment.
            log: Deferred log receiving fallback warnings.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        """
        self.settings = settings or MapperSettings()
        self.log = log or DeferredLog()
        self.transport = transport

    def fetch(self, issuer: str | None) -> OIDCMetadata:
        """
        Produces the metadata for the issuer.

        Without an issuer no request is made. Transport failures and malformed documents
        are logged as warnings and replaced by the vendor defaults; nothing is retried.

        Args:
            issuer: The configured issuer URL, or None.

        Returns:
            OIDCMetadata: Discovered or fallback metadata.

        Raises:
            DiscoveryError: If the issuer answers with an HTTP error status.
        """
        if issuer is None:
            return fallback_metadata(self.settings)

        try:
            document = self._fetch_document(discovery_url(issuer))
        except (DiscoveryUnreachableError, DiscoveryMalformedError) as e:
            self.log.warning(f"Failed to process '{WELL_KNOWN_PATH}' metadata. Using defaults for Okta: {e}")
            return fallback_metadata(self.settings, issuer)

        return metadata_from_document(document, issuer, self.settings)

    def _fetch_document(self, url: str) -> DiscoveryDocument:
        with httpx.Client(
            transport=self.transport, timeout=self.settings.http_timeout, follow_redirects=True
        ) as client:
            HTTPXClientInstrumentor().instrument_client(client)

            try:
                response = client.get(url)
            except (httpx.TransportError, httpx.TooManyRedirects) as e:
                raise DiscoveryUnreachableError(f"Failed to fetch OIDC configuration from {url}: {e}") from e
            except httpx.DecodingError as e:
                # Corrupt content-encoding is a malformed body, not an unreachable issuer
                raise DiscoveryMalformedError(f"Invalid OIDC configuration from {url}: {e}") from e

        if response.is_error:
            raise DiscoveryError(f"OIDC configuration request to {url} returned HTTP {response.status_code}")

        try:
            return DiscoveryDocument.model_validate(response.json())
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and pydantic's ValidationError
            raise DiscoveryMalformedError(f"Invalid OIDC configuration from {url}: {e}") from e
