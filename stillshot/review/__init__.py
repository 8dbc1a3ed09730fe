"""Review façade: interactive loop, bulk accept/reject and rendering."""

from .prompt import ReviewChoice, read_review_choice  # noqa: F401
from .render import diff_to_text, render_diff, render_new_snapshot, render_summary  # noqa: F401
from .workflow import ReviewSummary, accept_all, reject_all, review  # noqa: F401

__all__ = [
    "ReviewChoice",
    "ReviewSummary",
    "accept_all",
    "diff_to_text",
    "read_review_choice",
    "reject_all",
    "render_diff",
    "render_new_snapshot",
    "render_summary",
    "review",
]
