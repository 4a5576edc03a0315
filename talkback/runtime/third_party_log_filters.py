"""Log noise filters for third-party libraries.

HTTP client and websocket libraries log every request at INFO; keep them at
WARNING unless SHOW_THIRD_PARTY_LOGS is set.
"""

from __future__ import annotations

import os
import logging

from talkback.config.logging import THIRD_PARTY_LOGGERS


def configure() -> None:
    if (os.getenv("SHOW_THIRD_PARTY_LOGS") or "").strip().lower() in {"1", "true", "yes"}:
        return
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure"]
