"""
Input sanitization for untrusted text.

Everything a visitor types passes through here before it reaches an LLM
prompt, a log row or a response body. The functions are pure and never
touch I/O.
"""

import json
import re
from typing import Any, Union

from .exceptions import InvalidFormatError
from .models import ContactForm

MAX_CHAT_MESSAGE_LENGTH = 2000
MAX_CONTACT_NAME_LENGTH = 100
MAX_CONTACT_MESSAGE_LENGTH = 5000

ALLOWED_HTML_TAGS = frozenset({"b", "i", "em", "strong", "a", "p", "br"})

_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_BLOCK_RE = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
_QUOTED_HANDLER_RE = re.compile(r"""[\s/]on\w+\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)
_UNQUOTED_HANDLER_RE = re.compile(r"[\s/]on\w+\s*=\s*[^\s>\"']+", re.IGNORECASE)
_HTML_TAG_RE = re.compile(r"</?([a-z][a-z0-9]*)\b[^>]*>", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def sanitize_text(dirty: str) -> str:
    """
    Remove all markup tags and surrounding whitespace.

    A single pass is enough: any ``<`` left behind has no ``>`` after it,
    so the result can never contain a tag.
    """
    return _TAG_RE.sub("", dirty).strip()


def sanitize_chat_message(message: str) -> str:
    """
    Sanitize a chat message and cap it at MAX_CHAT_MESSAGE_LENGTH characters.

    Trailing whitespace exposed by the cut is trimmed too, which keeps the
    function idempotent.
    """
    cleaned = sanitize_text(message)
    if len(cleaned) > MAX_CHAT_MESSAGE_LENGTH:
        cleaned = cleaned[:MAX_CHAT_MESSAGE_LENGTH].rstrip()
    return cleaned


def sanitize_email(email: str) -> str:
    """
    Normalize an email address and check it looks like ``local@domain.tld``.

    Raises:
        InvalidFormatError: If the cleaned value is not an email address
    """
    cleaned = sanitize_text(email).lower().strip()
    if not _EMAIL_RE.fullmatch(cleaned):
        raise InvalidFormatError("Invalid email format", field="email")
    return cleaned


def sanitize_contact_form(data: Union[ContactForm, dict[str, Any]]) -> ContactForm:
    """
    Sanitize every field of a contact form submission.

    Raises:
        InvalidFormatError: If the email is malformed
    """
    form = data if isinstance(data, ContactForm) else ContactForm(**data)
    return ContactForm(
        name=sanitize_text(form.name)[:MAX_CONTACT_NAME_LENGTH],
        email=sanitize_email(form.email),
        message=sanitize_text(form.message)[:MAX_CONTACT_MESSAGE_LENGTH],
    )


def sanitize_html(dirty: str) -> str:
    """
    Keep a small set of inline formatting tags and drop everything else.

    Script blocks are removed with their content; inline event handlers are
    removed from the tags that survive.
    """
    cleaned = _SCRIPT_BLOCK_RE.sub("", dirty)
    cleaned = _QUOTED_HANDLER_RE.sub("", cleaned)
    cleaned = _UNQUOTED_HANDLER_RE.sub("", cleaned)

    def _keep_allowed(match: re.Match) -> str:
        return match.group(0) if match.group(1).lower() in ALLOWED_HTML_TAGS else ""

    return _HTML_TAG_RE.sub(_keep_allowed, cleaned)


def escape_special_chars(value: str) -> str:
    """Escape quotes and backslashes for use inside quoted query strings."""
    return value.replace("'", "''").replace("\\", "\\\\").replace('"', '\\"')


def sanitize_json(value: Any) -> Any:
    """
    Return a JSON-only deep copy of ``value``.

    Raises:
        InvalidFormatError: If the value cannot be represented as JSON
    """
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        raise InvalidFormatError("Invalid JSON input") from e
