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
Maps ``okta.oauth2.*`` keys and OIDC discovery metadata to standard OAuth2 keys.

| Vendor key / source                   | Standard key                                               |
|---------------------------------------|------------------------------------------------------------|
| okta.oauth2.client-id                 | ...client.registration.okta.client-id                      |
| okta.oauth2.client-secret             | ...client.registration.okta.client-secret                  |
| okta.oauth2.scopes                    | ...client.registration.okta.scope                          |
| authorization_endpoint                | ...client.provider.okta.authorization-uri                  |
| token_endpoint                        | ...client.provider.okta.token-uri                          |
| userinfo_endpoint                     | ...client.provider.okta.user-info-uri                      |
| jwks_uri                              | ...client.provider.okta.jwk-set-uri, ...jwt.jwk-set-uri    |
| ${okta.oauth2.issuer}                 | ...client.provider.okta.issuer-uri, ...jwt.issuer-uri      |
| ${okta.oauth2.client-id}              | ...resourceserver.opaque-token.client-id                   |
| ${okta.oauth2.client-secret}          | ...resourceserver.opaque-token.client-secret               |
| introspection_endpoint                | ...resourceserver.opaque-token.introspection-uri           |
"""

from typing import Any, Protocol

from coreason_oauth2_env.config import MapperSettings
from coreason_oauth2_env.discovery import MetadataFetcher
from coreason_oauth2_env.keys import BASE_URL_PLACEHOLDER, StandardKey, VendorKey, placeholder
from coreason_oauth2_env.layers import (
    AliasLayer,
    ComputedLayer,
    ConditionalLayer,
    ConfigLayer,
    PropertyResolver,
    bind_scopes,
)
from coreason_oauth2_env.models import OIDCMetadata
from coreason_oauth2_env.store import ConfigStore
from coreason_oauth2_env.utils.deferred_log import DeferredLog

LOWEST_PRECEDENCE = 2**31 - 1
ISSUER_PATH_SUFFIX = "/oauth2"


class Application(Protocol):
    """The bootstrap sequencer hook used to replay the deferred log."""

    def add_initializer(self, initializer: Any) -> None: ...


def resolve_issuer_with_path(issuer: str | None, alternate_style: bool) -> str | None:
    """
    Derives the base URL the vendor's endpoints hang off.

    The org authorization server needs ``/oauth2`` appended; custom authorization servers
    already carry it, and alternate-style issuers are used as-is.
    """
    if issuer is None:
        return None
    if alternate_style or ISSUER_PATH_SUFFIX in issuer:
        return issuer
    return issuer + ISSUER_PATH_SUFFIX


def remapped_client_credentials_layer(store: PropertyResolver) -> AliasLayer:
    return AliasLayer(
        "okta-to-oauth2",
        {
            StandardKey.CLIENT_ID: VendorKey.CLIENT_ID,
            StandardKey.CLIENT_SECRET: VendorKey.CLIENT_SECRET,
        },
        store,
    )


def remapped_scopes_layer(store: PropertyResolver) -> ComputedLayer:
    return ComputedLayer(
        "okta-scope-remapper",
        {StandardKey.SCOPE: lambda resolver: bind_scopes(resolver.get(VendorKey.SCOPES))},
        store,
        when=lambda resolver: resolver.has(VendorKey.SCOPES),
    )


def default_scopes_layer(store: PropertyResolver, metadata: OIDCMetadata) -> ConditionalLayer:
    return ConditionalLayer(
        "default-scopes",
        {StandardKey.SCOPE: metadata.default_scope},
        store,
        required=(VendorKey.ISSUER, VendorKey.CLIENT_ID),
    )


def issuer_with_path_layer(store: PropertyResolver, metadata: OIDCMetadata) -> ComputedLayer:
    alternate = metadata.is_alternate_issuer_style

    def issuer_with_path(resolver: PropertyResolver) -> str | None:
        return resolve_issuer_with_path(resolver.get(VendorKey.ISSUER), alternate)

    return ComputedLayer(
        "okta-issuer-url-resolving-source",
        {VendorKey.ISSUER_WITH_PATH: issuer_with_path},
        store,
        when=lambda resolver: resolver.has(VendorKey.ISSUER),
    )


def static_discovery_layer(store: PropertyResolver, metadata: OIDCMetadata) -> ConditionalLayer:
    return ConditionalLayer(
        "okta-static-discovery",
        {
            StandardKey.JWT_ISSUER_URI: placeholder(VendorKey.ISSUER),
            StandardKey.JWT_JWK_SET_URI: metadata.jwk_set_uri,
            StandardKey.AUTHORIZATION_URI: metadata.authorization_uri,
            StandardKey.TOKEN_URI: metadata.token_uri,
            StandardKey.USER_INFO_URI: metadata.user_info_uri,
            StandardKey.JWK_SET_URI: metadata.jwk_set_uri,
            # required for OIDC logout
            StandardKey.ISSUER_URI: placeholder(VendorKey.ISSUER),
        },
        store,
        required=(VendorKey.ISSUER,),
    )


def opaque_token_layer(store: PropertyResolver, metadata: OIDCMetadata) -> ConditionalLayer:
    return ConditionalLayer(
        "okta-opaque-token",
        {
            StandardKey.OPAQUE_TOKEN_CLIENT_ID: placeholder(VendorKey.CLIENT_ID),
            StandardKey.OPAQUE_TOKEN_CLIENT_SECRET: placeholder(VendorKey.CLIENT_SECRET),
            StandardKey.OPAQUE_TOKEN_INTROSPECTION_URI: metadata.introspection_uri,
        },
        store,
        required=(VendorKey.ISSUER, VendorKey.CLIENT_SECRET),
    )


def redirect_uri_layer(store: PropertyResolver) -> ConditionalLayer:
    return ConditionalLayer(
        "okta-redirect-uri-helper",
        {StandardKey.REDIRECT_URI: BASE_URL_PLACEHOLDER + placeholder(VendorKey.REDIRECT_URI)},
        store,
        required=(VendorKey.REDIRECT_URI,),
    )


def pkce_layer(store: PropertyResolver, metadata: OIDCMetadata) -> ConditionalLayer:
    # A client without a secret is public and eligible for PKCE
    return ConditionalLayer(
        "okta-pkce-for-public-clients",
        {StandardKey.CLIENT_AUTHENTICATION_METHOD: metadata.client_authentication_method},
        store,
        required=(VendorKey.ISSUER, VendorKey.CLIENT_ID),
        forbidden=(StandardKey.CLIENT_SECRET,),
    )


def build_layers(store: PropertyResolver, metadata: OIDCMetadata) -> list[ConfigLayer]:
    """
    Builds the mapping layers in installation order, highest priority first.

    The opaque-token layer is left out entirely when the metadata has no introspection
    endpoint.

    Args:
        store: The resolver every layer evaluates its visibility and values against.
        metadata: The discovered or fallback metadata.

    Returns:
        list[ConfigLayer]: The layers to append to the store.
    """
    layers: list[ConfigLayer] = [
        remapped_client_credentials_layer(store),
        remapped_scopes_layer(store),
        default_scopes_layer(store, metadata),
        issuer_with_path_layer(store, metadata),
        static_discovery_layer(store, metadata),
    ]
    if metadata.introspection_uri is not None:
        layers.append(opaque_token_layer(store, metadata))
    layers.append(redirect_uri_layer(store))
    layers.append(pkce_layer(store, metadata))
    return layers


class OAuth2PropertyMapper:
    """
    Installs the mapping layers into a ConfigStore.

    Runs during bootstrap, before logging is configured, so warnings go to a DeferredLog
    that is replayed once the application's initializers run.

    Attributes:
        order (int): Post-processor ordering; runs after the others.
        fetcher (MetadataFetcher): Resolves OIDCMetadata for the configured issuer.
        log (DeferredLog): Buffered warnings.
    """

    order = LOWEST_PRECEDENCE - 1

    def __init__(self, settings: MapperSettings | None = None, fetcher: MetadataFetcher | None = None) -> None:
        """
        Initialize the OAuth2PropertyMapper.

        Args:
            settings: Mapper settings, used when no fetcher is supplied.
            fetcher: Metadata fetcher. Its deferred log becomes the mapper's.
        """
        self.log = fetcher.log if fetcher else DeferredLog(source=__name__)
        self.fetcher = fetcher or MetadataFetcher(settings, log=self.log)
        self.metadata: OIDCMetadata | None = None

    def post_process(self, store: ConfigStore, application: Application | None = None) -> None:
        """
        Resolves metadata for the store's issuer and appends the layers to the store.

        Args:
            store: The configuration store to extend.
            application: Bootstrap sequencer. When given, the deferred log is replayed
                from one of its initializers.

        Raises:
            DiscoveryError: If discovery fails in a way that is not recovered.
        """
        self.metadata = self.fetcher.fetch(store.get(VendorKey.ISSUER))

        for layer in build_layers(store, self.metadata):
            store.add_last(layer)

        if application is not None:
            application.add_initializer(lambda _store: self.log.replay_to())
