# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

from coreason_oauth2_env.chain import build_layers
from coreason_oauth2_env.config import MapperSettings
from coreason_oauth2_env.discovery import fallback_metadata
from coreason_oauth2_env.keys import VENDOR_PREFIX, StandardKey, VendorKey, placeholder
from coreason_oauth2_env.layers import StaticLayer
from coreason_oauth2_env.store import ConfigStore


def test_vendor_keys_share_prefix() -> None:
    assert all(key.startswith(VENDOR_PREFIX) for key in VendorKey)
    assert VendorKey.ISSUER_WITH_PATH == "okta.oauth2.issuer-with-path"


def test_standard_keys_are_unique() -> None:
    assert len({str(key) for key in StandardKey}) == len(StandardKey)
    assert all(key.startswith("security.oauth2.") for key in StandardKey)


def test_placeholder() -> None:
    assert placeholder(VendorKey.ISSUER) == "${okta.oauth2.issuer}"


def test_every_standard_key_is_produced() -> None:
    """Each standard key is produced by some layer when every vendor key is set."""
    store = ConfigStore.from_mapping(
        {
            VendorKey.ISSUER: "https://example.okta.com",
            VendorKey.CLIENT_ID: "abc",
            VendorKey.SCOPES: "openid",
            VendorKey.REDIRECT_URI: "/callback",
        }
    )
    for layer in build_layers(store, fallback_metadata(MapperSettings())):
        store.add_last(layer)

    # PKCE needs the secret absent, the opaque-token and client-secret keys need it present
    produced = {key for key in StandardKey if store.has(key)}
    store.add_first(StaticLayer("secrets", {VendorKey.CLIENT_SECRET: "shh"}))
    produced |= {key for key in StandardKey if store.has(key)}

    assert produced == set(StandardKey)
