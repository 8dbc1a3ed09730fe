"""Transform pipeline: normalizes content before it is snapshotted or diffed.

Plain mode runs scrub rules over the text in the order given. Structured
mode parses JSON, applies ignore rules at every object entry, re-serializes
with sorted keys and a fixed indent, and then runs the scrub rules over the
serialized text. Identical input and rules always give byte-identical output.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from stillshot.errors import MalformedInputError
from stillshot.logging import get_logger
from stillshot.transform.ignore import REDACTION_MARKER, IgnoreAction, IgnoreRule
from stillshot.transform.scrubbers import ScrubRule

_LOG = get_logger("transform")

JSON_INDENT = 2


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_json(content: str) -> Any:
    """Parse strict JSON. Raises MalformedInputError with no partial result."""
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        raise MalformedInputError(f"content is not valid JSON: {exc}") from exc


def dump_json(tree: Any) -> str:
    """Deterministic serialization: sorted keys, fixed indent, trailing newline."""
    return json.dumps(tree, indent=JSON_INDENT, sort_keys=True, ensure_ascii=False, allow_nan=False) + "\n"


def stringify(value: Any) -> str:
    """String form of a JSON value as seen by ignore rules."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _match(rules: Sequence[IgnoreRule], key: str, value: Any) -> Optional[IgnoreAction]:
    text = stringify(value)
    for rule in rules:
        if rule.should_ignore(key, text):
            return rule.action
    return None


def apply_ignores(tree: Any, rules: Sequence[IgnoreRule]) -> Any:
    """Return a copy of tree with ignored object entries redacted or omitted."""
    if not rules:
        return tree
    if isinstance(tree, dict):
        out = {}
        for key, value in tree.items():
            action = _match(rules, str(key), value)
            if action is IgnoreAction.OMIT:
                continue
            if action is IgnoreAction.REDACT:
                out[key] = REDACTION_MARKER
                continue
            out[key] = apply_ignores(value, rules)
        return out
    if isinstance(tree, list):
        return [apply_ignores(item, rules) for item in tree]
    return tree


def apply_scrubbers(content: str, rules: Iterable[ScrubRule]) -> str:
    for rule in rules:
        content = rule.transform(content)
    return content


@dataclass
class TransformPipeline:
    """Ordered scrub and ignore rules applied to snapshot content."""

    scrubbers: List[ScrubRule] = field(default_factory=list)
    ignores: List[IgnoreRule] = field(default_factory=list)

    def apply(self, content: str, *, structured: bool = False) -> str:
        if not structured:
            if self.ignores:
                _LOG.debug("stillshot: %d ignore rule(s) have no effect on plain text", len(self.ignores))
            return apply_scrubbers(content, self.scrubbers)
        return self.apply_value(parse_json(content))

    def apply_value(self, value: Any) -> str:
        """Structured mode over an already-decoded JSON-shaped value."""
        try:
            text = dump_json(apply_ignores(value, self.ignores))
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(f"value is not JSON-serializable: {exc}") from exc
        return apply_scrubbers(text, self.scrubbers)


def apply_transforms(
    content: str,
    scrubbers: Iterable[ScrubRule] = (),
    ignores: Iterable[IgnoreRule] = (),
    *,
    structured: bool = False,
) -> str:
    """Run the pipeline once. Raises MalformedInputError for invalid JSON in structured mode."""
    return TransformPipeline(list(scrubbers), list(ignores)).apply(content, structured=structured)


def transform_value(
    value: Any,
    scrubbers: Iterable[ScrubRule] = (),
    ignores: Iterable[IgnoreRule] = (),
) -> str:
    return TransformPipeline(list(scrubbers), list(ignores)).apply_value(value)


def split_options(options: Iterable[Any]) -> Tuple[List[ScrubRule], List[IgnoreRule], List[Any]]:
    """Separate scrub rules, ignore rules and plain values from a mixed argument list."""
    scrubbers: List[ScrubRule] = []
    ignores: List[IgnoreRule] = []
    values: List[Any] = []
    for opt in options:
        if isinstance(opt, ScrubRule):
            scrubbers.append(opt)
        elif isinstance(opt, IgnoreRule):
            ignores.append(opt)
        else:
            values.append(opt)
    return scrubbers, ignores, values
