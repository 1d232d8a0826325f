"""Data models shared across pawprint modules."""

from pawprint.models.result import ActionResult
from pawprint.models.run import RunConfig

__all__ = ["ActionResult", "RunConfig"]
