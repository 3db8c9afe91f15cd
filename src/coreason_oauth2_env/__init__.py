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
Maps vendor OAuth2/OIDC configuration keys onto the standard OAuth2 client and
resource-server key schema, enriched by the issuer's discovery metadata.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .bootstrap import ApplicationBootstrap, bootstrap_from_env
from .chain import OAuth2PropertyMapper, build_layers, resolve_issuer_with_path
from .config import MapperSettings, VendorSettings
from .discovery import MetadataFetcher
from .exceptions import (
    CoreasonOAuth2EnvError,
    DiscoveryError,
    DiscoveryMalformedError,
    DiscoveryUnreachableError,
)
from .keys import StandardKey, VendorKey
from .layers import AliasLayer, ComputedLayer, ConditionalLayer, ConfigLayer, StaticLayer
from .models import IssuerStyle, OIDCMetadata
from .store import ConfigStore
from .utils.deferred_log import DeferredLog

__all__ = [
    "AliasLayer",
    "ApplicationBootstrap",
    "ComputedLayer",
    "ConditionalLayer",
    "ConfigLayer",
    "ConfigStore",
    "CoreasonOAuth2EnvError",
    "DeferredLog",
    "DiscoveryError",
    "DiscoveryMalformedError",
    "DiscoveryUnreachableError",
    "IssuerStyle",
    "MapperSettings",
    "MetadataFetcher",
    "OAuth2PropertyMapper",
    "OIDCMetadata",
    "StandardKey",
    "StaticLayer",
    "VendorKey",
    "VendorSettings",
    "bootstrap_from_env",
    "build_layers",
    "resolve_issuer_with_path",
]
