"""
Conversation extraction from a rendered ChatGPT share page.

The page is read once as serialised markup and queried with BeautifulSoup, so extraction
never mutates the live document and gives the same result for the same markup.
"""

import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from chatgpt_share_api.infrastructure.data_models import (
    ASSISTANT_ROLE,
    KNOWN_ROLES,
    OTHER_ROLE,
    USER_ROLE,
    ConversationResult,
    ExtractionDiagnostics,
    Message,
)

ROLE_ATTRIBUTE = "data-message-author-role"
CONTENT_SELECTOR = "[data-message-content], .markdown, .prose"
DEFAULT_TITLE = "Untitled Conversation"
MIN_CONTENT_LENGTH = 5

TITLE_PREFIX_PATTERN = re.compile(r"^ChatGPT\s*[-–—|:]\s*", re.IGNORECASE)
SAID_LABEL_PATTERN = re.compile(r"^(?:ChatGPT said:|You said:)\s*", re.IGNORECASE)
ROLE_LABEL_PATTERN = re.compile(r"^(?:ChatGPT|You)\s*:\s*", re.IGNORECASE)
LABEL_ONLY_PATTERN = re.compile(r"^(?:ChatGPT said|You said):?$", re.IGNORECASE)


def normalize_content(text: str) -> str:
    """Trim whitespace and strip the labels the share page injects before a message."""
    content = text.strip()
    content = SAID_LABEL_PATTERN.sub("", content, count=1)
    content = ROLE_LABEL_PATTERN.sub("", content, count=1)
    return content.strip()


def is_message_content(content: str) -> bool:
    return len(content) > MIN_CONTENT_LENGTH and not LABEL_ONLY_PATTERN.match(content)


def normalize_role(role: str | None) -> str:
    role = (role or "").strip().lower()
    return role if role in KNOWN_ROLES else OTHER_ROLE


def _element_text(element: Tag) -> str:
    content_element = element.select_one(CONTENT_SELECTOR)
    if content_element is not None:
        return content_element.get_text()
    return element.get_text()


def extract_title(soup: BeautifulSoup) -> str:
    title_element = soup.find("title")
    if title_element is not None:
        title = TITLE_PREFIX_PATTERN.sub("", title_element.get_text().strip(), count=1).strip()
        if title:
            return title

    heading = soup.find("h1")
    if heading is not None:
        title = heading.get_text().strip()
        if title:
            return title

    return DEFAULT_TITLE


class ConversationExtractor:
    """Turns a rendered share page into a title and an ordered list of messages."""

    def __init__(self, parser: str = "html.parser") -> None:
        self.parser = parser

    def extract(self, page: Any) -> ConversationResult:
        """Extract from a loaded page. Readiness is the caller's responsibility."""
        return self.extract_html(page.content())

    def extract_html(self, html: str) -> ConversationResult:
        soup = BeautifulSoup(html, self.parser)
        debug = ExtractionDiagnostics()
        messages: list[Message] = []

        # select() returns elements in document order, which is turn order
        for element in soup.select(f"[{ROLE_ATTRIBUTE}]"):
            debug.total_elements += 1
            role = normalize_role(element.get(ROLE_ATTRIBUTE))  # type: ignore[arg-type]
            if role == USER_ROLE:
                debug.user_elements += 1
            elif role == ASSISTANT_ROLE:
                debug.assistant_elements += 1

            content = normalize_content(_element_text(element))
            if is_message_content(content):
                messages.append(Message(role=role, content=content))

        return ConversationResult(title=extract_title(soup), messages=messages, debug=debug)
