from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from themesync.client import ThemeClient
from themesync.errors import ThemeClientError, ThemeSetupError
from themesync.schemas import Theme

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.5


def wait_until_previewable(
    client: ThemeClient,
    *,
    interval: float = POLL_INTERVAL_SECONDS,
    max_attempts: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Theme:
    """Block until the client's theme reports itself previewable.

    Polls ``get_info`` every ``interval`` seconds with no upper bound unless
    ``max_attempts`` is given. Any error from ``get_info`` ends the wait: the
    setup guidance is logged and the original error is re-raised unchanged.
    """
    attempts = 0
    while True:
        attempts += 1
        try:
            theme = client.get_info()
        except (ThemeClientError, httpx.HTTPError):
            logger.error(ThemeSetupError.default_message, extra={"theme_id": client.theme_id})
            raise

        if theme.previewable:
            logger.info("theme.ready", extra={"theme_id": client.theme_id, "attempts": attempts})
            return theme

        if max_attempts is not None and attempts >= max_attempts:
            raise ThemeSetupError(
                f"Theme {client.theme_id} was not ready after {attempts} checks. "
                "Please run `theme download` to complete the setup."
            )
        logger.info("processing...", extra={"theme_id": client.theme_id, "attempts": attempts})
        sleep(interval)
