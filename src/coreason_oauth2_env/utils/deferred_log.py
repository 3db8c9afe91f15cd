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
Buffered log sink for code that runs before logging is configured.
"""

import threading
from dataclasses import dataclass
from typing import Any, Protocol

from coreason_oauth2_env.utils.logger import logger


class LogDestination(Protocol):
    def log(self, level: str, message: str) -> Any: ...


@dataclass(frozen=True)
class DeferredLine:
    level: str
    message: str


class DeferredLog:
    """
    Buffers log lines until ``replay_to`` is called, then replays them exactly once.

    After the replay every further line goes straight to the destination, and later
    ``replay_to`` calls have nothing left to replay.
    """

    def __init__(self, source: str | None = None) -> None:
        """
        Initialize the DeferredLog.

        Args:
            source: Optional name bound as ``extra["source"]`` on replayed lines.
        """
        self.source = source
        self._lines: list[DeferredLine] = []
        self._destination: LogDestination | None = None
        self._lock = threading.Lock()

    @property
    def lines(self) -> tuple[DeferredLine, ...]:
        with self._lock:
            return tuple(self._lines)

    @property
    def replayed(self) -> bool:
        return self._destination is not None

    def debug(self, message: str) -> None:
        self.log("DEBUG", message)

    def info(self, message: str) -> None:
        self.log("INFO", message)

    def warning(self, message: str) -> None:
        self.log("WARNING", message)

    def error(self, message: str) -> None:
        self.log("ERROR", message)

    def log(self, level: str, message: str) -> None:
        with self._lock:
            if self._destination is None:
                self._lines.append(DeferredLine(level, message))
                return
            destination = self._destination
        destination.log(level, message)

    def replay_to(self, destination: LogDestination | None = None) -> None:
        """
        Replays buffered lines into the destination (loguru's logger by default).

        Args:
            destination: Anything with a ``log(level, message)`` method.
        """
        if destination is None:
            destination = logger.bind(source=self.source) if self.source else logger

        with self._lock:
            if self._destination is not None:
                return
            self._destination = destination
            lines, self._lines = self._lines, []

        for line in lines:
            destination.log(line.level, line.message)
