"""Filesystem primitives for the rule engine.

This module provides directory walking, exclusion matching, glob
expansion and the handlers that perform the actual filesystem work.
"""

from pawprint.filesystem.exclusions import ExclusionRegistry
from pawprint.filesystem.expander import expand_glob
from pawprint.filesystem.handlers import Handlers
from pawprint.filesystem.walker import WalkEntry, walk

__all__ = [
    "ExclusionRegistry",
    "Handlers",
    "WalkEntry",
    "expand_glob",
    "walk",
]
