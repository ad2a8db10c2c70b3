"""
Headless browser lifecycle.

One `BrowserSession` is launched per request and closed on every exit path. Browsers are
never pooled or reused across requests.
"""

from dataclasses import dataclass

from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from chatgpt_share_api.app.config import ShareAPISettings
from chatgpt_share_api.infrastructure.platform_manager import create_logger

# Hides the automation flag some sites check before rendering shared content
HIDE_WEBDRIVER_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', {
    get: () => false,
});
"""


@dataclass(frozen=True)
class LaunchProfile:
    name: str
    args: tuple[str, ...]
    use_executable_path: bool = False


LAUNCH_PROFILES = {
    # Playwright's bundled Chromium on a regular host or container
    "full": LaunchProfile(
        name="full",
        args=(
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-blink-features=AutomationControlled",
            "--disable-dev-shm-usage",
            "--disable-gpu",
        ),
    ),
    # Trimmed Chromium binary for serverless runtimes (read-only fs, no /dev/shm, one process)
    "serverless": LaunchProfile(
        name="serverless",
        args=(
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-accelerated-2d-canvas",
            "--no-first-run",
            "--no-zygote",
            "--single-process",
            "--disable-gpu",
        ),
        use_executable_path=True,
    ),
}


def get_launch_profile(name: str) -> LaunchProfile:
    try:
        return LAUNCH_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown launch profile: {name}") from None


class BrowserSession:
    """A launched browser plus the Playwright driver that owns it."""

    def __init__(self, playwright: Playwright, browser: Browser) -> None:
        self._playwright = playwright
        self._browser = browser
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def new_page(self, user_agent: str) -> Page:
        """Open a page with the given user agent and the webdriver flag hidden."""
        page = self._browser.new_page(user_agent=user_agent)
        page.add_init_script(HIDE_WEBDRIVER_SCRIPT)
        return page

    def close(self) -> None:
        """Close the browser and stop the driver. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._browser.close()
        finally:
            self._playwright.stop()


def launch_browser(settings: ShareAPISettings) -> BrowserSession:
    """
    Launch Chromium with the flags of the configured launch profile.

    Args:
        settings (ShareAPISettings): Supplies the launch profile, headless flag and, for the
            serverless profile, the path to the trimmed browser binary.

    Returns:
        BrowserSession: The launched browser. The caller must call `close()`.
    """
    logger = create_logger(settings.log_level)
    profile = get_launch_profile(settings.launch_profile)
    executable_path = settings.chromium_executable_path if profile.use_executable_path else None
    if profile.use_executable_path and not executable_path:
        logger.warning(
            "Serverless launch profile without CHROMIUM_EXECUTABLE_PATH, "
            "using the bundled Chromium"
        )

    logger.info(f"Launching browser (profile={profile.name}, headless={settings.headless})")
    playwright = sync_playwright().start()
    try:
        browser = playwright.chromium.launch(
            headless=settings.headless,
            args=list(profile.args),
            executable_path=executable_path,
        )
    except Exception:
        playwright.stop()
        raise
    return BrowserSession(playwright, browser)
