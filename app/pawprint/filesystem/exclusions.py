"""Registry of paths protected from cleaning.

Patterns are glob-style and matched with fnmatch against absolute paths.
The registry only grows during a run; entries are never removed.
"""

import fnmatch
from collections.abc import Iterator


class ExclusionRegistry:
    """Append-only list of glob patterns consulted before deleting entries."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns or [])

    def register(self, pattern: str) -> None:
        """Add a pattern to the registry.

        A MemoryError here is deliberately not caught: a run must not
        continue with an incomplete set of exclusions.

        Args:
            pattern: Glob pattern, stored verbatim.
        """
        self._patterns.append(pattern)

    def is_excluded(self, path: str) -> bool:
        """Check if a path matches any registered pattern.

        Args:
            path: Path to check.

        Returns:
            True on the first matching pattern, False if none match.
        """
        return any(fnmatch.fnmatch(path, pattern) for pattern in self._patterns)

    @property
    def patterns(self) -> tuple[str, ...]:
        """Registered patterns in registration order."""
        return tuple(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)
