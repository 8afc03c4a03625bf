"""Runtime configuration for the application loop."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Application loop configuration.

    ``tick_interval`` is the sleep between loop ticks in seconds.
    ``query_timeout`` bounds how long a worker waits in
    :meth:`hti.application.Application.query`; ``None`` waits until the
    query is drained or the application closes.  ``write_log`` mirrors
    every terminal write to the named file when non-empty.
    """

    tick_interval: float = 0.01
    query_timeout: float | None = None
    write_log: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from ``HTI_*`` environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        tick_ms = _parse_float(env, "HTI_TICK_MS")
        if tick_ms is not None and tick_ms >= 0:
            config.tick_interval = tick_ms / 1000.0

        timeout = _parse_float(env, "HTI_QUERY_TIMEOUT")
        if timeout is not None and timeout > 0:
            config.query_timeout = timeout

        config.write_log = env.get("HTI_WRITE_LOG", "")
        return config


def _parse_float(env: Mapping[str, str], name: str) -> float | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r", name, raw)
        return None
