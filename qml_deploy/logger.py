"""Logging configuration using Loguru."""

from __future__ import annotations

import pathlib
import sys
from typing import Any

from loguru import logger


def setup_logging(
    *,
    verbose: bool = False,
    log_file: str | pathlib.Path | None = None,
    file_level: str = "DEBUG",
) -> None:
    """Configure the console sink and an optional file sink.

    Parameters
    ----------
    verbose:
        Emit step-by-step ``DEBUG`` messages on the console.
    log_file:
        When given, also write serialized (JSON) records to this file.
    file_level:
        Minimum log level for the file sink.

    Existing handlers are removed so repeated calls do not duplicate output.
    """

    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> {message}",
        backtrace=False,
        diagnose=False,
        colorize=None,
    )

    if log_file is not None:
        file_path = pathlib.Path(log_file).expanduser().resolve()
        file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            file_path,
            level=file_level.upper(),
            backtrace=False,
            diagnose=False,
            rotation="10 MB",
            retention="30 days",
            serialize=True,
        )

    logger.bind(verbose=verbose, log_file=str(log_file) if log_file else None).debug(
        "Logging configured"
    )


def log_deploy_event(event: str, **metadata: Any) -> None:
    """Emit a structured record for a deployment milestone.

    Parameters
    ----------
    event:
        Short event name such as ``"profile_loaded"`` or ``"bundle_ready"``.
    **metadata:
        Extra context (platform, paths, counts).
    """

    logger.bind(event=event, **metadata).info("deploy_event: {}", event)


__all__ = ["setup_logging", "log_deploy_event"]
