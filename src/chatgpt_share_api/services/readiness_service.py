"""
Page readiness heuristic.

There is no public signal for "the share page has finished rendering", so readiness is a
best-effort sequence of waits. All timings live in `ReadinessTimings` so they can be tuned
or replaced without touching extraction.
"""

import logging
from dataclasses import dataclass
from typing import Any

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from chatgpt_share_api.app.config import ShareAPISettings

ASSISTANT_SELECTOR = '[data-message-author-role="assistant"]'

SCROLL_TO_BOTTOM_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"
SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"


@dataclass(frozen=True)
class ReadinessTimings:
    selector_timeout_ms: int = 20_000
    scroll_settle_ms: int = 1_000
    final_settle_ms: int = 5_000

    @classmethod
    def from_settings(cls, settings: ShareAPISettings) -> "ReadinessTimings":
        return cls(
            selector_timeout_ms=settings.selector_timeout_ms,
            scroll_settle_ms=settings.scroll_settle_ms,
            final_settle_ms=settings.final_settle_ms,
        )


def wait_until_ready(page: Any, timings: ReadinessTimings, logger: logging.Logger) -> bool:
    """
    Wait for a navigated page to finish client-side rendering.

    Expects `page.goto(..., wait_until="networkidle")` to have returned already.

    Args:
        page: A Playwright page (or anything with the same wait/evaluate methods).
        timings (ReadinessTimings): Timeout and settle delays.
        logger (logging.Logger): Receives the selector-wait outcome.

    Returns:
        bool: True if an assistant message marker appeared before the selector timeout.
            A timeout is tolerated; the page may hold a single unanswered turn.
    """
    logger.info("Waiting for conversation elements to load")
    try:
        page.wait_for_selector(ASSISTANT_SELECTOR, timeout=timings.selector_timeout_ms)
        found_assistant = True
        logger.info("Assistant message found")
    except PlaywrightTimeoutError:
        found_assistant = False
        logger.warning(
            f"No assistant message after {timings.selector_timeout_ms} ms, continuing anyway"
        )

    # Trigger lazy-loaded turns
    page.evaluate(SCROLL_TO_BOTTOM_SCRIPT)
    page.wait_for_timeout(timings.scroll_settle_ms)
    page.evaluate(SCROLL_TO_TOP_SCRIPT)
    page.wait_for_timeout(timings.scroll_settle_ms)

    page.wait_for_timeout(timings.final_settle_ms)
    logger.info("Page settled")
    return found_assistant
