"""Tests for modules/security/sanitizer.py."""

import re

import pytest

from modules.security.exceptions import InvalidFormatError
from modules.security.models import ContactForm
from modules.security.sanitizer import (
    MAX_CHAT_MESSAGE_LENGTH,
    escape_special_chars,
    sanitize_chat_message,
    sanitize_contact_form,
    sanitize_email,
    sanitize_html,
    sanitize_json,
    sanitize_text,
)

TAG_RE = re.compile(r"<[^>]*>")


class TestSanitizeText:
    @pytest.mark.parametrize(
        "raw",
        [
            "<b>bold</b> text",
            "<script>alert(1)</script>",
            "a <<b>> b",
            "<img src=x onerror=alert(1)>",
            "no tags at all",
            "unclosed <div",
            "<<<>>>",
            "",
        ],
    )
    def test_output_never_contains_tags(self, raw):
        """Sanitized text should never contain a <...> sequence."""
        assert TAG_RE.search(sanitize_text(raw)) is None

    def test_strips_tags_and_trims(self):
        """Tags are removed and surrounding whitespace trimmed."""
        assert sanitize_text("   <p>Hello <b>world</b></p>  ") == "Hello world"

    def test_keeps_plain_text(self):
        """Plain text passes through unchanged."""
        assert sanitize_text("What projects have you built?") == "What projects have you built?"


class TestSanitizeChatMessage:
    def test_truncates_to_max_length(self):
        """Long messages are capped at 2000 characters."""
        result = sanitize_chat_message("a" * 5000)
        assert len(result) == MAX_CHAT_MESSAGE_LENGTH

    @pytest.mark.parametrize(
        "raw",
        [
            "hello",
            "x" * 1999 + " y",
            "word " * 600,
            "<b>" + "z" * 3000 + "</b>",
            "  padded  ",
        ],
    )
    def test_is_idempotent(self, raw):
        """Sanitizing twice gives the same result as sanitizing once."""
        once = sanitize_chat_message(raw)
        assert sanitize_chat_message(once) == once
        assert len(once) <= MAX_CHAT_MESSAGE_LENGTH

    def test_strips_markup(self):
        """Chat messages are stripped of tags."""
        assert sanitize_chat_message("<i>hi</i> there") == "hi there"


class TestSanitizeEmail:
    def test_normalizes_case_and_whitespace(self):
        """Email addresses are trimmed and lower-cased."""
        assert sanitize_email("  USER@Example.COM ") == "user@example.com"

    def test_rejects_invalid_format(self):
        """Strings without local@domain.tld shape are rejected."""
        with pytest.raises(InvalidFormatError) as exc_info:
            sanitize_email("not-an-email")
        assert exc_info.value.code == "INVALID_FORMAT"
        assert exc_info.value.details == {"field": "email"}

    @pytest.mark.parametrize("raw", ["a@b", "@example.com", "user@", "two words@example.com"])
    def test_rejects_malformed(self, raw):
        """Malformed addresses raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            sanitize_email(raw)

    def test_strips_tags_before_validation(self):
        """Markup around an address is removed first."""
        assert sanitize_email("<b>me@example.com</b>") == "me@example.com"


class TestSanitizeContactForm:
    def test_applies_field_limits(self):
        """Name and message are capped at their limits."""
        form = sanitize_contact_form(
            {"name": "n" * 150, "email": "Visitor@Example.com", "message": "m" * 6000}
        )
        assert isinstance(form, ContactForm)
        assert len(form.name) == 100
        assert len(form.message) == 5000
        assert form.email == "visitor@example.com"

    def test_accepts_model_instance(self):
        """A ContactForm instance is accepted as input."""
        form = sanitize_contact_form(
            ContactForm(name="<b>Ann</b>", email="ann@example.com", message="Hi <i>there</i>")
        )
        assert form.name == "Ann"
        assert form.message == "Hi there"

    def test_propagates_email_failure(self):
        """An invalid email fails the whole form."""
        with pytest.raises(InvalidFormatError):
            sanitize_contact_form({"name": "Ann", "email": "nope", "message": "hello"})


class TestSanitizeHtml:
    def test_keeps_allowed_tags(self):
        """Allowed inline tags survive."""
        assert sanitize_html("<b>bold</b> and <em>em</em>") == "<b>bold</b> and <em>em</em>"

    def test_removes_script_blocks_with_content(self):
        """Script blocks are removed entirely."""
        assert sanitize_html("ok<script>alert('x')</script>done") == "okdone"

    def test_removes_event_handlers(self):
        """Inline event handlers are stripped from surviving tags."""
        result = sanitize_html('<a href="/x" onclick="steal()">link</a>')
        assert "onclick" not in result
        assert result == '<a href="/x">link</a>'

    @pytest.mark.parametrize(
        "dirty,expected",
        [
            ('<a/onclick="alert(1)">x</a>', "<a>x</a>"),
            ("<b/onmouseover=alert(1)>y</b>", "<b>y</b>"),
            ("<i/ONFOCUS='go()'>z</i>", "<i>z</i>"),
        ],
    )
    def test_removes_slash_separated_handlers(self, dirty, expected):
        """A slash before the handler name does not let it through."""
        result = sanitize_html(dirty)
        assert "on" not in result.lower()
        assert result == expected

    def test_removes_disallowed_tags(self):
        """Tags outside the allow-list are dropped but their text kept."""
        assert sanitize_html("<div><p>para</p></div>") == "<p>para</p>"


class TestHelpers:
    def test_escape_special_chars(self):
        """Quotes and backslashes are escaped."""
        assert escape_special_chars("it's") == "it''s"
        assert escape_special_chars('say "hi"') == 'say \\"hi\\"'

    def test_sanitize_json_round_trips(self):
        """JSON-compatible values come back equal."""
        value = {"a": [1, 2, {"b": None}], "c": "d"}
        assert sanitize_json(value) == value

    def test_sanitize_json_rejects_non_json(self):
        """Values that cannot be serialized raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            sanitize_json({"when": object()})
