"""Centralized logging configuration for CLI and web entry points."""

from __future__ import annotations

import logging
import os

LOG_FORMAT: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_MODULE_LOGGERS: dict[str, str] = {
    "AGENTS": "Alpha_Insight.agents",
    "SERVICES": "Alpha_Insight.services",
    "WEB": "Alpha_Insight.web",
    "REPORTING": "Alpha_Insight.reporting",
}

# SDK and transport loggers that narrate every Gemini request at INFO.
_NOISY_LOGGERS: tuple[str, ...] = ("google_genai", "httpx", "httpcore")


def _resolve_level(name: str | None, default: int) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if not name:
        return default
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(
    *,
    level: str = "",
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the root logger for the dashboard server and the CLI.

    Priority: verbose > quiet > level param > LOG_LEVEL env > INFO default.
    ``force=True`` replaces whatever uvicorn installed first. Per-package
    overrides come from ``LOG_LEVEL_AGENTS``, ``LOG_LEVEL_SERVICES``,
    ``LOG_LEVEL_WEB`` and ``LOG_LEVEL_REPORTING``.
    """
    if verbose:
        effective = logging.DEBUG
    elif quiet:
        effective = logging.WARNING
    elif level:
        effective = _resolve_level(level, logging.INFO)
    else:
        effective = _resolve_level(os.environ.get("LOG_LEVEL"), logging.INFO)

    logging.basicConfig(level=effective, format=LOG_FORMAT, force=True)

    # RequestLoggingMiddleware replaces the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    noisy_level = logging.DEBUG if verbose else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    for key, logger_name in _MODULE_LOGGERS.items():
        override = os.environ.get(f"LOG_LEVEL_{key}")
        if override:
            logging.getLogger(logger_name).setLevel(_resolve_level(override, logging.INFO))
