"""Post-order directory traversal.

Children are always visited before the directory that contains them,
so callers can delete entries bottom-up. Paths are joined explicitly;
the process working directory is never changed. Symlinks are visited
as leaf entries and never descended into.
"""

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """An entry found while walking a directory.

    Attributes:
        path: Full path of the entry.
        is_dir: Whether the entry is a directory (symlinks never are).
        stat: lstat result captured when the parent was listed, before any
            of the entry's children were visited.
    """

    path: str
    is_dir: bool
    stat: os.stat_result


def walk(
    root: str,
    visit: Callable[[WalkEntry], None],
    *,
    recursive: bool = True,
    include_hidden: bool = False,
) -> None:
    """Visit every entry below ``root``, children before parents.

    The root itself is never visited. An unreadable directory is logged
    and skipped.

    Args:
        root: Directory to walk.
        visit: Callback invoked once per entry.
        recursive: Descend into subdirectories.
        include_hidden: Also visit entries whose name starts with ``.``.
    """
    try:
        with os.scandir(root) as iterator:
            entries = sorted(iterator, key=lambda e: e.name)
    except OSError as e:
        logger.warning("Cannot open directory %s: %s", root, e)
        return

    for entry in entries:
        if entry.name.startswith(".") and not include_hidden:
            continue

        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", entry.path, e)
            continue

        item = WalkEntry(path=entry.path, is_dir=stat.S_ISDIR(st.st_mode), stat=st)
        if item.is_dir and recursive:
            walk(entry.path, visit, recursive=True, include_hidden=include_hidden)
        visit(item)
