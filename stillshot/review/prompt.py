"""Interactive accept/reject prompt for the review loop."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from stillshot.logging import get_logger

_LOG = get_logger("review.prompt")


class ReviewChoice(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    SKIP = "skip"
    TOGGLE_DIFF = "diff"
    QUIT = "quit"


_ALIASES = {
    "a": ReviewChoice.ACCEPT,
    "accept": ReviewChoice.ACCEPT,
    "r": ReviewChoice.REJECT,
    "reject": ReviewChoice.REJECT,
    "s": ReviewChoice.SKIP,
    "skip": ReviewChoice.SKIP,
    "d": ReviewChoice.TOGGLE_DIFF,
    "diff": ReviewChoice.TOGGLE_DIFF,
    "q": ReviewChoice.QUIT,
    "quit": ReviewChoice.QUIT,
}

PROMPT = "[a]ccept/[r]eject/[s]kip/[d]iff/[q]uit: "


def parse_choice(raw: str) -> ReviewChoice | None:
    return _ALIASES.get(raw.strip().lower())


def read_review_choice(prompt: str, read: Optional[Callable[[str], str]] = None) -> ReviewChoice:
    """Read one valid choice; re-prompts on invalid input. End of input means quit."""
    read = read or input
    while True:
        try:
            raw = read(prompt)
        except EOFError:
            _LOG.info("stillshot: end of input, stopping review")
            return ReviewChoice.QUIT
        choice = parse_choice(raw)
        if choice is not None:
            return choice
        _LOG.warning("Use one of: a, r, s, d, q")
