"""Glob expansion of rule paths."""

import glob
import logging

logger = logging.getLogger(__name__)


def expand_glob(pattern: str) -> list[str]:
    """Expand a shell-style pattern into the matching paths.

    Order is whatever the platform's directory listing returns. Dangling
    symlinks are included, since removal rules must still reach them.

    Args:
        pattern: Glob pattern from a rule.

    Returns:
        Matching paths; empty if nothing matches.
    """
    matches = glob.glob(pattern)
    if not matches:
        logger.debug("No paths match %s", pattern)
    return matches
