"""Stateless path queries used by the handlers."""

import os
import stat


def path_exists(path: str) -> bool:
    """Check if a directory entry exists, without following a final symlink."""
    return os.path.lexists(path)


def is_directory(path: str, *, follow_symlinks: bool = False) -> bool:
    """Check if a path is a directory.

    Args:
        path: Path to check.
        follow_symlinks: If False, a symlink to a directory is not a directory.

    Returns:
        True if the path is a directory.
    """
    if not follow_symlinks and os.path.islink(path):
        return False
    return os.path.isdir(path)


def latest_timestamp(target: str | os.stat_result) -> float:
    """Most recent of access, modification and change time.

    Args:
        target: Path (examined with lstat) or an existing stat result.

    Returns:
        POSIX timestamp in seconds.

    Raises:
        OSError: If target is a path that cannot be examined.
    """
    st = os.lstat(target) if isinstance(target, str) else target
    return max(st.st_atime, st.st_mtime, st.st_ctime)


def is_regular_file(path: str) -> bool:
    """Check if a path resolves to a regular file, following symlinks."""
    try:
        st = os.stat(path)
    except OSError:
        return False
    return stat.S_ISREG(st.st_mode)
