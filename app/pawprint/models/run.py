"""Execution configuration for a pawprint run.

The run configuration is built once at startup (by the CLI or a caller)
and passed by reference into the parser, the handlers and the runner.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


def _normalize_prefix(prefix: str) -> str:
    stripped = prefix.rstrip("/")
    return stripped or "/"


def path_has_prefix(path: str, prefix: str) -> bool:
    """Check whether ``path`` lies at or below ``prefix``.

    Matching is done per path component, so ``/var`` matches ``/var/tmp``
    but not ``/variable``.

    Args:
        path: Path (or glob pattern) from a rule.
        prefix: Directory prefix to test against.

    Returns:
        True if path equals prefix or is located beneath it.
    """
    prefix = _normalize_prefix(prefix)
    if prefix == "/":
        return path.startswith("/")
    return path == prefix or path.startswith(prefix + "/")


class RunConfig(BaseModel):
    """Execution modes consumed by the rule engine.

    Attributes:
        create: Allow creating files and directories and writing content.
        clean: Allow age-based cleaning of directories.
        remove: Allow removal of files and directory contents.
        boot: Honour rules marked with the on-boot-only modifier.
        force_clean: Clean entries regardless of their age.
        dry_run: Report every mutation without performing it.
        prefixes: Only apply rules whose path lies below one of these.
        exclude_prefixes: Ignore rules whose path lies below one of these.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    create: Annotated[bool, Field(description="Create files and directories")] = False
    clean: Annotated[bool, Field(description="Clean entries by age")] = False
    remove: Annotated[bool, Field(description="Remove files and directory contents")] = False
    boot: Annotated[bool, Field(description="Apply on-boot-only rules")] = False
    force_clean: Annotated[bool, Field(description="Clean regardless of age")] = False
    dry_run: Annotated[bool, Field(description="Do not modify the filesystem")] = False
    prefixes: Annotated[
        tuple[str, ...],
        Field(description="Only apply rules below these paths"),
    ] = ()
    exclude_prefixes: Annotated[
        tuple[str, ...],
        Field(description="Ignore rules below these paths"),
    ] = ()

    @property
    def has_action(self) -> bool:
        """Check if at least one of create, clean or remove is enabled."""
        return self.create or self.clean or self.remove

    def selects(self, path: str) -> bool:
        """Check if a rule path passes the prefix filters.

        Args:
            path: Path or glob pattern from a rule.

        Returns:
            True if the rule should be applied.
        """
        if self.prefixes and not any(path_has_prefix(path, p) for p in self.prefixes):
            return False
        return not any(path_has_prefix(path, p) for p in self.exclude_prefixes)
