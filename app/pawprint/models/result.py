"""Result model for handler execution."""

from dataclasses import dataclass

from pawprint.rules.attributes import Flag


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of one handler applied to one path.

    Attributes:
        path: Path the handler operated on.
        action: Capability flag of the handler that produced this result.
        success: Whether the handler completed without a warning.
        message: Short description of what was done.
        error: Error message if the handler failed, None otherwise.
        dry_run: Whether the change was only simulated.
    """

    path: str
    action: Flag
    success: bool
    message: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the handler failed."""
        return not self.success

    @property
    def action_name(self) -> str:
        """Lowercase, hyphenated name of the handler's flag."""
        return (self.action.name or "unknown").lower().replace("_", "-")
