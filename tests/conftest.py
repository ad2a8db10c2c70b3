from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from chatgpt_share_api.app.config import ShareAPISettings, config
from chatgpt_share_api.infrastructure.platform_manager import create_logger

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SHARE_PAGE_HTML = (FIXTURES_DIR / "share_page.html").read_text()

SHARE_URL = "https://chatgpt.com/share/abc123"

SETTING_ENV_VARS = [
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LAUNCH_PROFILE",
    "RESPONSE_MODE",
    "CHROMIUM_EXECUTABLE_PATH",
    "HEADLESS",
    "USER_AGENT",
    "NAVIGATION_TIMEOUT_MS",
    "SELECTOR_TIMEOUT_MS",
    "SCROLL_SETTLE_MS",
    "FINAL_SETTLE_MS",
    "EMPTY_RESULT_IS_ERROR",
    "LOG_DIR",
]


def build_page(turns: list[tuple[str, str]], title: str = "ChatGPT - Test conversation") -> str:
    """Build a minimal share page with one role-tagged element per (role, text) turn."""
    body = "\n".join(
        f'<div data-message-author-role="{role}"><div class="markdown">{text}</div></div>'
        for role, text in turns
    )
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


class FakePage:
    """Stands in for a Playwright page backed by fixed markup."""

    def __init__(self, html: str, goto_error: Exception | None = None) -> None:
        self.html = html
        self.goto_error = goto_error
        self.calls: list[tuple[str, Any]] = []

    def add_init_script(self, script: str) -> None:
        self.calls.append(("add_init_script", script))

    def goto(self, url: str, wait_until: str | None = None, timeout: float | None = None) -> None:
        self.calls.append(("goto", (url, wait_until, timeout)))
        if self.goto_error is not None:
            raise self.goto_error

    def wait_for_selector(self, selector: str, timeout: float | None = None) -> None:
        self.calls.append(("wait_for_selector", (selector, timeout)))
        if 'data-message-author-role="assistant"' not in self.html:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def evaluate(self, script: str) -> None:
        self.calls.append(("evaluate", script))

    def wait_for_timeout(self, timeout: float) -> None:
        self.calls.append(("wait_for_timeout", timeout))

    def content(self) -> str:
        self.calls.append(("content", None))
        return self.html

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeBrowser:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.close_count = 0
        self.user_agents: list[str] = []

    def new_page(self, user_agent: str) -> FakePage:
        self.user_agents.append(user_agent)
        return self.page

    def close(self) -> None:
        self.close_count += 1


class FakeLauncher:
    """Browser launcher spy: records each launch and hands out a fake browser."""

    def __init__(self, browser: FakeBrowser | None = None, error: Exception | None = None):
        self.browser = browser
        self.error = error
        self.calls: list[ShareAPISettings] = []

    def __call__(self, settings: ShareAPISettings) -> FakeBrowser:
        self.calls.append(settings)
        if self.error is not None:
            raise self.error
        assert self.browser is not None
        return self.browser


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from default settings with no settle delays."""
    for name in SETTING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FINAL_SETTLE_MS", "0")
    monkeypatch.setenv("SCROLL_SETTLE_MS", "0")
    config.reset()
    yield
    config.reset()


@pytest.fixture
def logger():
    return create_logger("DEBUG", logger_name="chatgpt-share-api-tests")


@pytest.fixture
def share_page() -> FakePage:
    return FakePage(SHARE_PAGE_HTML)


@pytest.fixture
def fake_browser(share_page: FakePage) -> FakeBrowser:
    return FakeBrowser(share_page)


@pytest.fixture
def fake_launcher(fake_browser: FakeBrowser) -> FakeLauncher:
    return FakeLauncher(fake_browser)


@pytest.fixture
def patch_launcher(monkeypatch: pytest.MonkeyPatch, fake_launcher: FakeLauncher) -> FakeLauncher:
    """Route every browser launch made by the request handler through the spy."""
    monkeypatch.setattr("chatgpt_share_api.services.fetch_service.launch_browser", fake_launcher)
    return fake_launcher


def navigation_failure(message: str = "net::ERR_NAME_NOT_RESOLVED at https://chatgpt.com/share/abc123"):
    return PlaywrightError(message)
