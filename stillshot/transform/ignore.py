"""Ignore rules: predicates over JSON object entries.

Consulted only by the structured transform. A matching rule either redacts
the entry's value (the key stays as a stable diff anchor) or omits the
entry altogether.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from re import Pattern
from typing import Callable, FrozenSet, Iterable, Optional, Union

REDACTION_MARKER = "<IGNORED>"


class IgnoreAction(str, Enum):
    REDACT = "redact"
    OMIT = "omit"


class IgnoreRule(ABC):
    """Decides whether a (key, stringified value) pair is ignored."""

    action: IgnoreAction = IgnoreAction.REDACT

    @abstractmethod
    def should_ignore(self, key: str, value: str) -> bool:
        ...


@dataclass(frozen=True)
class KeyValueIgnore(IgnoreRule):
    """Exact key and value; value "*" matches any value."""

    key: str
    value: str
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        return self.key == key and (self.value == "*" or self.value == value)


@dataclass(frozen=True)
class KeySetIgnore(IgnoreRule):
    keys: FrozenSet[str]
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        return key in self.keys


@dataclass(frozen=True)
class ValueSetIgnore(IgnoreRule):
    values: FrozenSet[str]
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        return value in self.values


@dataclass(frozen=True)
class KeyPatternIgnore(IgnoreRule):
    pattern: Pattern[str]
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        return self.pattern.search(key) is not None


@dataclass(frozen=True)
class KeyValuePatternIgnore(IgnoreRule):
    """Regex on key and/or value; a missing pattern matches anything."""

    key_pattern: Optional[Pattern[str]] = None
    value_pattern: Optional[Pattern[str]] = None
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        key_ok = self.key_pattern is None or self.key_pattern.search(key) is not None
        value_ok = self.value_pattern is None or self.value_pattern.search(value) is not None
        return key_ok and value_ok


@dataclass(frozen=True)
class PredicateIgnore(IgnoreRule):
    predicate: Callable[[str, str], bool] = field(compare=False)
    action: IgnoreAction = IgnoreAction.REDACT

    def should_ignore(self, key: str, value: str) -> bool:
        return bool(self.predicate(key, value))


def _action(omit: bool) -> IgnoreAction:
    return IgnoreAction.OMIT if omit else IgnoreAction.REDACT


def _optional_regex(pattern: Union[str, Pattern[str], None]) -> Optional[Pattern[str]]:
    if pattern is None or pattern == "":
        return None
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def ignore_key_value(key: str, value: str, *, omit: bool = False) -> IgnoreRule:
    """Ignore entries whose key and value match exactly. Use "*" to match any value."""
    return KeyValueIgnore(key, value, _action(omit))


def ignore_keys(*keys: str, omit: bool = False) -> IgnoreRule:
    return KeySetIgnore(frozenset(keys), _action(omit))


def ignore_values(*values: str, omit: bool = False) -> IgnoreRule:
    return ValueSetIgnore(frozenset(values), _action(omit))


def ignore_keys_matching(pattern: Union[str, Pattern[str]], *, omit: bool = False) -> IgnoreRule:
    compiled = _optional_regex(pattern)
    if compiled is None:
        raise ValueError("ignore_keys_matching requires a non-empty pattern")
    return KeyPatternIgnore(compiled, _action(omit))


def ignore_key_pattern(
    key_pattern: Union[str, Pattern[str], None] = None,
    value_pattern: Union[str, Pattern[str], None] = None,
    *,
    omit: bool = False,
) -> IgnoreRule:
    """Ignore entries whose key and value both match; None or "" matches anything."""
    return KeyValuePatternIgnore(_optional_regex(key_pattern), _optional_regex(value_pattern), _action(omit))


def custom_ignore(predicate: Callable[[str, str], bool], *, omit: bool = False) -> IgnoreRule:
    return PredicateIgnore(predicate, _action(omit))


SENSITIVE_KEYS = (
    "password",
    "passwd",
    "secret",
    "token",
    "api_key",
    "apiKey",
    "access_token",
    "refresh_token",
    "private_key",
    "privateKey",
    "authorization",
    "auth",
    "credentials",
)


def ignore_sensitive_keys(extra: Iterable[str] = (), *, omit: bool = False) -> IgnoreRule:
    """Redact common credential-bearing keys such as password and token."""
    return KeySetIgnore(frozenset(SENSITIVE_KEYS) | frozenset(extra), _action(omit))


def ignore_empty_values(*, omit: bool = True) -> IgnoreRule:
    return custom_ignore(lambda _key, value: value.strip() == "", omit=omit)


def ignore_null_values(*, omit: bool = True) -> IgnoreRule:
    return custom_ignore(lambda _key, value: value == "null", omit=omit)
