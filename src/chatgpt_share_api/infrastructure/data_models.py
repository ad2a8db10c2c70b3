"""
Shared data models.

All models are request-scoped: built while handling one share URL and dropped once the
response has been serialised.
"""

from dataclasses import dataclass, field
from typing import Any

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
OTHER_ROLE = "other"
KNOWN_ROLES = (USER_ROLE, ASSISTANT_ROLE)


@dataclass(frozen=True)
class ShareRequest:
    share_url: str


@dataclass(frozen=True)
class Message:
    role: str  # "user" | "assistant" | "other"
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ExtractionDiagnostics:
    """Counts of role-tagged elements found on the page, for logging only."""

    total_elements: int = 0
    user_elements: int = 0
    assistant_elements: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalElements": self.total_elements,
            "userElements": self.user_elements,
            "assistantElements": self.assistant_elements,
        }


@dataclass
class ConversationResult:
    title: str
    messages: list[Message] = field(default_factory=list)
    debug: ExtractionDiagnostics = field(default_factory=ExtractionDiagnostics)

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def to_dict(self) -> dict[str, Any]:
        return {
            "messages": [message.to_dict() for message in self.messages],
            "title": self.title,
            "debug": self.debug.to_dict(),
        }


@dataclass(frozen=True)
class HtmlSnapshot:
    """Rendered page markup returned by the HTML passthrough response mode."""

    html: str

    def to_dict(self) -> dict[str, Any]:
        return {"html": self.html}
