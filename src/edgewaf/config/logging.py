"""Logging setup for the dynamic-provider host process."""

from __future__ import annotations

import logging

from .env import optional_env_var

LOG_LEVEL_ENV = "EDGEWAF_LOG_LEVEL"
# httpx logs every request line at INFO; keep provider output to our own events.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Send provider logs to stderr once per process.

    The level defaults to ``EDGEWAF_LOG_LEVEL`` (falling back to INFO). Pulumi
    shows the host's stderr as diagnostics.
    """

    effective = level if level is not None else optional_env_var(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
