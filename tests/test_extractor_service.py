from chatgpt_share_api.services.extractor_service import (
    DEFAULT_TITLE,
    ConversationExtractor,
    normalize_content,
)
from tests.conftest import SHARE_PAGE_HTML, FakePage, build_page


class TestConversationExtractor:
    def test_fixture_page(self):
        result = ConversationExtractor().extract(FakePage(SHARE_PAGE_HTML))

        assert result.title == "Planning a weekend in Lisbon"
        assert [m.role for m in result.messages] == ["user", "assistant", "user", "assistant"]
        assert result.messages[0].content == "What should I see in Lisbon over a weekend?"
        assert result.messages[1].content == (
            "Start with the Alfama district and take tram 28 up to the castle."
        )
        assert result.messages[3].content == "Try Time Out Market for variety."
        assert result.debug.to_dict() == {
            "totalElements": 4,
            "userElements": 2,
            "assistantElements": 2,
        }

    def test_document_order_and_roles_preserved(self):
        turns = [
            ("assistant", "Welcome back, how can I help?"),
            ("user", "Summarise this article please"),
            ("assistant", "Here is a short summary."),
            ("user", "Thanks, that is helpful"),
            ("assistant", "Happy to help any time."),
        ]
        result = ConversationExtractor().extract_html(build_page(turns))

        assert [(m.role, m.content) for m in result.messages] == turns

    def test_label_only_elements_are_dropped(self):
        html = build_page([
            ("user", "You said:"),
            ("assistant", "ChatGPT said:"),
            ("user", "  you said:  "),
            ("assistant", "CHATGPT SAID:"),
            ("user", "A real question here"),
        ])
        result = ConversationExtractor().extract_html(html)

        assert [m.content for m in result.messages] == ["A real question here"]
        assert result.debug.total_elements == 5

    def test_label_prefix_is_stripped(self):
        html = build_page([("user", "You said: Hello there")])
        result = ConversationExtractor().extract_html(html)

        assert result.messages[0].content == "Hello there"

    def test_short_content_is_dropped(self):
        html = build_page([("user", "Hi"), ("assistant", "12345"), ("user", "123456")])
        result = ConversationExtractor().extract_html(html)

        assert [m.content for m in result.messages] == ["123456"]

    def test_label_words_mid_string_are_kept(self):
        html = build_page([("assistant", "Earlier You said: keep it short. ChatGPT: noted.")])
        result = ConversationExtractor().extract_html(html)

        assert result.messages[0].content == "Earlier You said: keep it short. ChatGPT: noted."

    def test_falls_back_to_full_element_text(self):
        html = (
            "<html><head><title>ChatGPT - Plain</title></head><body>"
            '<div data-message-author-role="user"><span>Plain user text</span></div>'
            "</body></html>"
        )
        result = ConversationExtractor().extract_html(html)

        assert result.messages[0].content == "Plain user text"

    def test_unknown_roles_are_reported_as_other(self):
        html = build_page([("tool", "Search results: three matches")])
        result = ConversationExtractor().extract_html(html)

        assert result.messages[0].role == "other"
        assert result.debug.user_elements == 0
        assert result.debug.assistant_elements == 0

    def test_no_role_markers_gives_empty_result(self):
        html = "<html><head><title>ChatGPT</title></head><body><p>Loading...</p></body></html>"
        result = ConversationExtractor().extract_html(html)

        assert result.is_empty
        assert result.debug.total_elements == 0
        assert result.title == "ChatGPT"

    def test_title_falls_back_to_heading_then_placeholder(self):
        with_heading = "<html><body><h1>Heading title</h1></body></html>"
        without_anything = "<html><body></body></html>"

        assert ConversationExtractor().extract_html(with_heading).title == "Heading title"
        assert ConversationExtractor().extract_html(without_anything).title == DEFAULT_TITLE

    def test_extraction_is_idempotent(self):
        page = FakePage(SHARE_PAGE_HTML)
        extractor = ConversationExtractor()

        first = extractor.extract(page)
        second = extractor.extract(page)

        assert first.to_dict() == second.to_dict()


def test_normalize_content_only_strips_leading_labels():
    assert normalize_content("  ChatGPT said: Sure thing  ") == "Sure thing"
    assert normalize_content("You: question") == "question"
    assert normalize_content("Your question was good") == "Your question was good"
