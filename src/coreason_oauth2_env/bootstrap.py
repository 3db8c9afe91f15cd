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
Application bootstrap sequencing.
"""

from collections.abc import Callable
from typing import Protocol

from coreason_oauth2_env.chain import OAuth2PropertyMapper
from coreason_oauth2_env.config import MapperSettings, VendorSettings
from coreason_oauth2_env.store import ConfigStore
from coreason_oauth2_env.utils.logger import configure_logging, logger

Initializer = Callable[[ConfigStore], None]


class PostProcessor(Protocol):
    order: int

    def post_process(self, store: ConfigStore, application: "ApplicationBootstrap | None" = None) -> None: ...


class ApplicationBootstrap:
    """
    Runs configuration post-processors, then configures logging, then runs initializers.

    Post-processors run before logging exists; anything they need to log is buffered and
    replayed by an initializer they register. ``run`` executes the sequence once.
    """

    def __init__(
        self,
        store: ConfigStore | None = None,
        configure_logs: Callable[[], None] = configure_logging,
    ) -> None:
        """
        Initialize the ApplicationBootstrap.

        Args:
            store: The configuration store. Defaults to an empty one.
            configure_logs: Logging setup, called between post-processors and initializers.
        """
        self.store = store if store is not None else ConfigStore()
        self.configure_logs = configure_logs
        self._post_processors: list[PostProcessor] = []
        self._initializers: list[Initializer] = []
        self._ran = False

    def add_post_processor(self, post_processor: PostProcessor) -> None:
        self._post_processors.append(post_processor)

    def add_initializer(self, initializer: Initializer) -> None:
        self._initializers.append(initializer)

    def run(self) -> ConfigStore:
        """
        Executes the bootstrap sequence.

        Returns:
            ConfigStore: The fully assembled store.

        Raises:
            RuntimeError: If the bootstrap already ran.
        """
        if self._ran:
            raise RuntimeError("Application bootstrap already ran")
        self._ran = True

        for post_processor in sorted(self._post_processors, key=lambda p: p.order):
            post_processor.post_process(self.store, self)

        self.configure_logs()

        for initializer in self._initializers:
            initializer(self.store)

        logger.debug(f"Configuration layers: {', '.join(self.store.names)}")
        return self.store


def bootstrap_from_env(settings: MapperSettings | None = None) -> ConfigStore:
    """
    Builds a store from ``OKTA_OAUTH2_*`` environment variables and installs the OAuth2
    mapping layers behind them.

    Args:
        settings: Mapper settings. Defaults to ``MapperSettings()`` read from the environment.

    Returns:
        ConfigStore: The assembled store.
    """
    application = ApplicationBootstrap(ConfigStore([VendorSettings().as_layer()]))
    application.add_post_processor(OAuth2PropertyMapper(settings))
    return application.run()
