"""
Heuristic detection of prompt injection and abuse markers.

Rules are plain data so deployments can extend or replace the default set
without touching the detector. Matching is case-insensitive and purely
string based; the first rule that matches wins.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern

from .models import DetectionResult


@dataclass(frozen=True)
class DetectionRule:
    """A single suspicious-pattern rule.

    Attributes:
        category: Rule family reported in the detection reason
        pattern: Compiled regular expression to search for
        description: Short human-readable label for the rule
    """

    category: str
    pattern: Pattern[str]
    description: str

    @property
    def reason(self) -> str:
        return f"{self.category}: {self.description}"


def _rule(category: str, pattern: str, description: str) -> DetectionRule:
    return DetectionRule(category, re.compile(pattern, re.IGNORECASE), description)


DEFAULT_RULES: tuple[DetectionRule, ...] = (
    # Instruction override
    _rule(
        "prompt_injection",
        r"\b(ignore|disregard|forget)\s+(all\s+)?(the\s+)?(previous|prior|above|earlier)\s+"
        r"(instructions?|prompts?|rules?|context)\b",
        "instruction override",
    ),
    _rule(
        "prompt_injection",
        r"\boverride\s+(your\s+)?(instructions?|programming|directives?)\b",
        "instruction override",
    ),
    _rule("prompt_injection", r"\bnew\s+instructions?\s*[:=]", "injected instructions"),
    _rule(
        "prompt_injection",
        r"^\s*(system|assistant)\s*:|\[/?(system|inst)\]|<\|im_start\|>",
        "role delimiter",
    ),
    # Prompt extraction
    _rule(
        "prompt_extraction",
        r"\b(show|tell|reveal|display|print|repeat|give)\s+(me\s+)?(your|the)\s+"
        r"(system\s+)?(prompt|instructions)\b",
        "system prompt request",
    ),
    _rule(
        "prompt_extraction",
        r"\bwhat\s+(is|are)\s+your\s+(system\s+)?(prompt|instructions)\b",
        "system prompt request",
    ),
    # Role manipulation
    _rule(
        "role_manipulation",
        r"\b(DAN|developer|jailbreak|god|sudo)\s+mode\b",
        "jailbreak mode",
    ),
    _rule("role_manipulation", r"\bdo\s+anything\s+now\b", "jailbreak mode"),
    _rule(
        "role_manipulation",
        r"\b(pretend|act\s+as\s+if)\s+(you\s+)?(have|had)\s+no\s+(restrictions?|rules|limits?)\b",
        "restriction removal",
    ),
    # Script injection
    _rule("script_injection", r"<\s*script\b", "script tag"),
    _rule("script_injection", r"javascript\s*:", "javascript URL"),
    _rule("script_injection", r"\bon(error|load|click|mouseover)\s*=", "inline event handler"),
    # SQL injection
    _rule(
        "sql_injection",
        r"('\s*(or|and)\s+'?\d+'?\s*=\s*'?\d+)|(;\s*(drop|delete|truncate)\s+table\b)"
        r"|(\bunion\s+(all\s+)?select\b)",
        "SQL injection",
    ),
    # Path traversal
    _rule("path_traversal", r"(\.\./){2,}|\.\.\\\.\.\\", "path traversal"),
)


class SuspiciousPatternDetector:
    """
    Scans text against a configurable rule list.

    Besides the regex rules, text that is dominated by a single repeated
    character or word is flagged as excessive repetition.
    """

    def __init__(
        self,
        rules: Optional[Iterable[DetectionRule]] = None,
        repetition_threshold: int = 50,
        min_length_for_repetition: int = 200,
    ):
        self._rules: list[DetectionRule] = list(DEFAULT_RULES if rules is None else rules)
        self._repetition_threshold = repetition_threshold
        self._min_length_for_repetition = min_length_for_repetition
        self._char_run_re = re.compile(r"(\S)\1{%d,}" % (repetition_threshold - 1))

    @property
    def rules(self) -> tuple[DetectionRule, ...]:
        return tuple(self._rules)

    def add_rule(self, rule: DetectionRule) -> None:
        """Append a rule; it is evaluated after the existing ones."""
        self._rules.append(rule)

    def detect(self, text: str) -> DetectionResult:
        """
        Evaluate all rules against ``text``.

        Returns:
            DetectionResult with the reason of the first matching rule, or
            ``is_suspicious=False`` when nothing matches
        """
        if not text:
            return DetectionResult(is_suspicious=False)

        for rule in self._rules:
            if rule.pattern.search(text):
                return DetectionResult(is_suspicious=True, reason=rule.reason)

        if self._is_excessively_repetitive(text):
            return DetectionResult(
                is_suspicious=True,
                reason="excessive_repetition: repeated content",
            )

        return DetectionResult(is_suspicious=False)

    def _is_excessively_repetitive(self, text: str) -> bool:
        if self._char_run_re.search(text):
            return True

        if len(text) < self._min_length_for_repetition:
            return False

        words = text.lower().split()
        if len(words) < self._repetition_threshold:
            return False
        _, top_count = Counter(words).most_common(1)[0]
        return top_count >= self._repetition_threshold and top_count / len(words) > 0.5


_default_detector = SuspiciousPatternDetector()


def detect_suspicious_patterns(text: str) -> DetectionResult:
    """Run the default rule set against ``text``."""
    return _default_detector.detect(text)
