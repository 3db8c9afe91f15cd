# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

import logging
import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from opentelemetry import trace

__all__ = ["logger", "configure_logging"]

DEFAULT_LOG_FILE = "logs/app.log"


class InterceptHandler(logging.Handler):
    """
    Redirects standard logging messages to Loguru.
    Ensures libraries using standard logging are captured uniformly.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno  # type: ignore[assignment]

        # Find caller from where originated the logged message
        frame = logging.currentframe()
        depth = 2
        while frame and (frame.f_code.co_filename == logging.__file__ or frame.f_code.co_filename == __file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_injector(record: dict[str, Any]) -> None:
    """
    Injects OpenTelemetry trace_id and span_id into the log record.
    Used as a patcher for Loguru.
    """
    span = trace.get_current_span()
    # Only an active, valid span carries ids worth recording
    ctx = span.get_span_context()
    if ctx.is_valid:
        # Inject into 'extra' so it appears in JSON output and can be used in format
        record["extra"]["trace_id"] = format(ctx.trace_id, "032x")
        record["extra"]["span_id"] = format(ctx.span_id, "016x")


def configure_logging() -> None:
    """
    Configures the logger based on environment variables.

    Not run at import: the bootstrap sequencer calls it once the configuration chain is
    installed, and messages emitted before that point go through a DeferredLog.

    Environment:
        COREASON_LOG_LEVEL: Minimum level (default INFO).
        COREASON_LOG_JSON: ``true`` for JSON lines on stdout instead of text on stderr.
        COREASON_LOG_FILE: JSON file sink path (default logs/app.log). Empty disables it.
    """
    log_level = os.getenv("COREASON_LOG_LEVEL", "INFO").upper()
    log_json = os.getenv("COREASON_LOG_JSON", "false").lower() == "true"
    log_file = os.getenv("COREASON_LOG_FILE", DEFAULT_LOG_FILE)

    # Verify level exists in Loguru, default to INFO if not
    try:
        logger.level(log_level)
    except ValueError:
        log_level = "INFO"

    # Drops every previously added handler, so repeated calls do not duplicate output
    logger.configure(handlers=[], patcher=trace_id_injector)

    # Sink 1: Console (Stdout/Stderr)
    if log_json:
        # JSON logs to stdout are preferred for containerized environments
        logger.add(sys.stdout, level=log_level, serialize=True)
    else:
        # Human-readable logs to stderr
        logger.add(
            sys.stderr,
            level=log_level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
        )

    # Sink 2: File (JSON, Rotation, Retention)
    # Always JSON for file to allow structured analysis later
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                log_file,
                rotation="500 MB",
                retention="10 days",
                serialize=True,
                enqueue=True,
                level=log_level,
            )
        except OSError:
            # Read-only filesystem: console logging only
            pass

    # Intercept standard logging
    # Force=True ensures we override existing config
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Match the root logger level so stdlib debug records are not built only to be dropped
    numeric_level = logging.getLevelName(log_level)
    logging.getLogger().setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)
