import logging
from collections.abc import Callable
from typing import Any

from playwright.sync_api import Error as PlaywrightError

from chatgpt_share_api.app.config import ShareAPISettings
from chatgpt_share_api.infrastructure.browser_manager import launch_browser
from chatgpt_share_api.infrastructure.data_models import (
    ConversationResult,
    HtmlSnapshot,
    ShareRequest,
)
from chatgpt_share_api.services.errors import (
    ExtractionDegradation,
    NavigationError,
    ResourceError,
)
from chatgpt_share_api.services.extractor_service import ConversationExtractor
from chatgpt_share_api.services.readiness_service import ReadinessTimings, wait_until_ready

BrowserLauncher = Callable[[ShareAPISettings], Any]


def fetch_conversation(
    share_request: ShareRequest,
    settings: ShareAPISettings,
    logger: logging.Logger,
    launcher: BrowserLauncher | None = None,
) -> ConversationResult | HtmlSnapshot:
    """
    Render a share page in a fresh browser and return its conversation or markup.

    The browser is closed exactly once on every path that launched it, including when
    navigation, readiness or extraction raise.

    Args:
        share_request (ShareRequest): Validated share URL.
        settings (ShareAPISettings): Launch profile, response mode and timings.
        logger (logging.Logger): Request logger.
        launcher: Returns a browser session for the settings. Defaults to `launch_browser`.

    Returns:
        ConversationResult in "extract" mode, HtmlSnapshot in "html" mode.

    Raises:
        ResourceError: The browser could not be launched.
        NavigationError: The page could not be loaded.
        ExtractionDegradation: No messages were found and empty results are errors.
    """
    launcher = launcher or launch_browser

    logger.info("Launching browser")
    try:
        browser = launcher(settings)
    except Exception as e:
        logger.error(f"Browser launch failed: {e}")
        raise ResourceError(str(e)) from e

    try:
        page = browser.new_page(user_agent=settings.user_agent)

        logger.info(f"Loading page: {share_request.share_url}")
        try:
            page.goto(
                share_request.share_url,
                wait_until="networkidle",
                timeout=settings.navigation_timeout_ms,
            )
        except PlaywrightError as e:
            raise NavigationError(str(e)) from e
        logger.info("Page loaded, waiting for rendering")

        if settings.response_mode == "html":
            page.wait_for_timeout(settings.final_settle_ms)
            html = page.content()
            logger.info(f"HTML length: {len(html)} characters")
            return HtmlSnapshot(html=html)

        wait_until_ready(page, ReadinessTimings.from_settings(settings), logger)

        logger.info("Extracting conversation")
        result = ConversationExtractor().extract(page)
    finally:
        # A failing close must not mask the error already in flight
        try:
            browser.close()
            logger.info("Browser closed")
        except Exception as e:
            logger.error(f"Browser close failed: {e}")

    logger.info(f"Extracted {len(result.messages)} messages")
    logger.info(f"Title: {result.title}")
    logger.info(f"Debug: {result.debug.to_dict()}")

    if result.is_empty and settings.empty_result_is_error:
        raise ExtractionDegradation(
            f"No messages extracted from {share_request.share_url}", result.debug.to_dict()
        )

    return result
