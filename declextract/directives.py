"""
Directive comment interpretation.

A directive is a comment line starting with ``easyscan:skip`` or
``easyscan:explicit``. Directives found in the comments above a type
declaration accumulate into a DirectiveState that is consumed and reset by
the next type declaration.
"""

import logging
from dataclasses import dataclass

from declextract.config import SKIP_DIRECTIVE, EXPLICIT_DIRECTIVE

logger = logging.getLogger(__name__)


@dataclass
class DirectiveState:
    """Directive flags pending for the next type declaration."""

    skip: bool = False
    explicit: bool = False

    def merge(self, other: "DirectiveState") -> None:
        """OR another state's flags into this one."""
        self.skip = self.skip or other.skip
        self.explicit = self.explicit or other.explicit

    def reset(self) -> None:
        self.skip = False
        self.explicit = False

    def includes(self, all_types: bool) -> bool:
        """Return True when the next declaration should be extracted."""
        if self.skip:
            return False
        return self.explicit or all_types


def strip_comment_markers(comment_text: str) -> str:
    """Remove ``//`` or ``/* */`` delimiters from raw comment text.

    Args:
        comment_text: Raw comment text, at least 3 characters long.

    Returns:
        Comment body without its delimiters.
    """
    if comment_text[1] == "/":
        return comment_text[2:]
    if comment_text[1] == "*":
        return comment_text[2:-2]
    return comment_text


def interpret_comment(comment_text: str) -> DirectiveState:
    """Resolve the directive flags set by one comment.

    Args:
        comment_text: Raw text of a comment node, delimiters included.

    Returns:
        A DirectiveState with ``skip``/``explicit`` set for each directive line.
        Text too short to hold a comment body yields an empty state.
    """
    state = DirectiveState()
    if len(comment_text) < 3:
        return state

    for line in strip_comment_markers(comment_text).split("\n"):
        line = line.strip()
        if line.startswith(SKIP_DIRECTIVE):
            state.skip = True
        if line.startswith(EXPLICIT_DIRECTIVE):
            state.explicit = True

    if state.skip or state.explicit:
        logger.debug("Directive comment: skip=%s explicit=%s", state.skip, state.explicit)
    return state
