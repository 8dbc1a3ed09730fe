"""Scrub rules: text transforms applied to snapshot content in order.

Three rule shapes exist (exact substring, regex, caller function); the
``scrub_*`` helpers are ready-made regex rules for common volatile values.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from re import Pattern
from typing import Callable, Union


class ScrubRule(ABC):
    """Transforms text; later rules see earlier rules' output."""

    @abstractmethod
    def transform(self, text: str) -> str:
        ...

    def __call__(self, text: str) -> str:
        return self.transform(text)


@dataclass(frozen=True)
class ExactScrubber(ScrubRule):
    target: str
    replacement: str

    def transform(self, text: str) -> str:
        if not self.target:
            return text
        return text.replace(self.target, self.replacement)


@dataclass(frozen=True)
class RegexScrubber(ScrubRule):
    """Regex replace. Replacement may reference groups as ``\\1`` or ``\\g<name>``."""

    pattern: Pattern[str]
    replacement: str

    def transform(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


@dataclass(frozen=True)
class FunctionScrubber(ScrubRule):
    func: Callable[[str], str] = field(compare=False)

    def transform(self, text: str) -> str:
        return self.func(text)


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def exact_match_scrubber(target: str, replacement: str) -> ScrubRule:
    """Replace every occurrence of target with replacement."""
    return ExactScrubber(target, replacement)


def regex_scrubber(pattern: Union[str, Pattern[str]], replacement: str) -> ScrubRule:
    """Replace regex matches; raises re.error for an invalid pattern."""
    return RegexScrubber(_compile(pattern), replacement)


def custom_scrubber(func: Callable[[str], str]) -> ScrubRule:
    return FunctionScrubber(func)


UUID_PATTERN = r"\b[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\b"
EMAIL_PATTERN = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}"
TIMESTAMP_PATTERN = (
    r"\b\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?"
)
DATE_PATTERN = r"\b(?:\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4})\b"
IPV4_PATTERN = r"\b(?:(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)\.){3}(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)\b"
JWT_PATTERN = r"\beyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+"
CREDIT_CARD_PATTERN = r"\b\d{4}[- ]?\d{4}[- ]?\d{4}[- ]?\d{4}\b"
UNIX_TIMESTAMP_PATTERN = r"\b\d{10}(?:\d{3})?\b"
API_KEY_PATTERN = r"\b(?:sk|pk|rk)_(?:live|test)_[A-Za-z0-9]+\b|\bapi_key_[A-Za-z0-9_]+\b"


def scrub_uuids(placeholder: str = "<UUID>") -> ScrubRule:
    return regex_scrubber(UUID_PATTERN, placeholder)


def scrub_emails(placeholder: str = "<EMAIL>") -> ScrubRule:
    return regex_scrubber(EMAIL_PATTERN, placeholder)


def scrub_timestamps(placeholder: str = "<TIMESTAMP>") -> ScrubRule:
    """ISO-8601 date-times, with optional fraction and zone."""
    return regex_scrubber(TIMESTAMP_PATTERN, placeholder)


def scrub_dates(placeholder: str = "<DATE>") -> ScrubRule:
    """YYYY-MM-DD and MM/DD/YYYY dates. Run after scrub_timestamps when both are used."""
    return regex_scrubber(DATE_PATTERN, placeholder)


def scrub_ip_addresses(placeholder: str = "<IP>") -> ScrubRule:
    return regex_scrubber(IPV4_PATTERN, placeholder)


def scrub_jwts(placeholder: str = "<JWT>") -> ScrubRule:
    return regex_scrubber(JWT_PATTERN, placeholder)


def scrub_credit_cards(placeholder: str = "<CREDIT_CARD>") -> ScrubRule:
    return regex_scrubber(CREDIT_CARD_PATTERN, placeholder)


def scrub_unix_timestamps(placeholder: str = "<UNIX_TIMESTAMP>") -> ScrubRule:
    """Standalone 10-digit (seconds) or 13-digit (milliseconds) integers."""
    return regex_scrubber(UNIX_TIMESTAMP_PATTERN, placeholder)


def scrub_api_keys(placeholder: str = "<API_KEY>") -> ScrubRule:
    return regex_scrubber(API_KEY_PATTERN, placeholder)
