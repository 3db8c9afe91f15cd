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
Custom exceptions for the coreason-oauth2-env package.
"""


class CoreasonOAuth2EnvError(Exception):
    """Base exception for all coreason-oauth2-env errors."""


class DiscoveryError(CoreasonOAuth2EnvError):
    """
    Raised when the discovery document cannot be used.
    Not recovered by the fetcher unless it is one of the subclasses below.
    """


class DiscoveryUnreachableError(DiscoveryError):
    """Raised when the discovery request fails at the transport level (connect error, timeout)."""


class DiscoveryMalformedError(DiscoveryError):
    """Raised when the discovery response body is not a usable JSON object."""
