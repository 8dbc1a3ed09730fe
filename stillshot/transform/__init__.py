"""Content transform façade: scrub rules, ignore rules and the pipeline."""

from .ignore import (  # noqa: F401
    REDACTION_MARKER,
    SENSITIVE_KEYS,
    IgnoreAction,
    IgnoreRule,
    custom_ignore,
    ignore_empty_values,
    ignore_key_pattern,
    ignore_key_value,
    ignore_keys,
    ignore_keys_matching,
    ignore_null_values,
    ignore_sensitive_keys,
    ignore_values,
)
from .pipeline import (  # noqa: F401
    TransformPipeline,
    apply_ignores,
    apply_scrubbers,
    apply_transforms,
    dump_json,
    parse_json,
    split_options,
    transform_value,
)
from .scrubbers import (  # noqa: F401
    ScrubRule,
    custom_scrubber,
    exact_match_scrubber,
    regex_scrubber,
    scrub_api_keys,
    scrub_credit_cards,
    scrub_dates,
    scrub_emails,
    scrub_ip_addresses,
    scrub_jwts,
    scrub_timestamps,
    scrub_unix_timestamps,
    scrub_uuids,
)

__all__ = [
    "REDACTION_MARKER",
    "SENSITIVE_KEYS",
    "IgnoreAction",
    "IgnoreRule",
    "ScrubRule",
    "TransformPipeline",
    "apply_ignores",
    "apply_scrubbers",
    "apply_transforms",
    "dump_json",
    "parse_json",
    "transform_value",
    "split_options",
    "custom_ignore",
    "ignore_empty_values",
    "ignore_key_pattern",
    "ignore_key_value",
    "ignore_keys",
    "ignore_keys_matching",
    "ignore_null_values",
    "ignore_sensitive_keys",
    "ignore_values",
    "custom_scrubber",
    "exact_match_scrubber",
    "regex_scrubber",
    "scrub_api_keys",
    "scrub_credit_cards",
    "scrub_dates",
    "scrub_emails",
    "scrub_ip_addresses",
    "scrub_jwts",
    "scrub_timestamps",
    "scrub_unix_timestamps",
    "scrub_uuids",
]
