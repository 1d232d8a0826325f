"""Flag dispatcher.

Runs the handlers enabled by an operation record against one path, in
strictly ascending flag-bit order. The order is part of the contract:
creation must precede writing, ownership must precede permissions, and
so on, however many flags a rule enables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from pawprint.rules.attributes import Flag

if TYPE_CHECKING:
    from pawprint.filesystem.handlers import Handlers
    from pawprint.models.result import ActionResult
    from pawprint.rules.parser import OperationRecord

logger = logging.getLogger(__name__)

Handler = Callable[[str, "OperationRecord"], "ActionResult | None"]


class Dispatcher:
    """Invokes handlers for the flags set in an operation record.

    Flags without a handler (the append and traversal modifiers) are
    ignored here; handlers read them from the record.
    """

    def __init__(self, handlers: Handlers) -> None:
        bindings: dict[Flag, Handler] = {
            Flag.CREATE: handlers.create_file,
            Flag.CREATE_DIRECTORY: handlers.create_dir,
            Flag.OWNERSHIP: handlers.set_owner,
            Flag.PERMISSION: handlers.set_perm,
            Flag.WRITE: handlers.write_content,
            Flag.CLEAN: handlers.clean,
            Flag.REMOVE: handlers.remove,
            Flag.ATTRIBUTES: handlers.set_attrs,
            Flag.EXCLUDE: handlers.register_exclusion,
        }
        self._handlers = handlers
        self._order: list[tuple[Flag, Handler]] = sorted(
            bindings.items(), key=lambda item: item[0].value
        )

    @property
    def handlers(self) -> Handlers:
        """Handler set this dispatcher invokes."""
        return self._handlers

    @property
    def order(self) -> tuple[Flag, ...]:
        """Flags that have a handler, in execution order."""
        return tuple(flag for flag, _ in self._order)

    def dispatch(self, path: str, record: OperationRecord) -> list[ActionResult]:
        """Apply every handler enabled in record to path.

        A failing handler does not stop the ones after it.

        Args:
            path: Resolved filesystem path.
            record: Operation record of the rule.

        Returns:
            Results of the handlers that acted or failed, in execution order.
        """
        results: list[ActionResult] = []
        for flag, handler in self._order:
            if flag not in record.flags:
                continue
            logger.debug("Applying %s to %s", flag.name, path)
            result = handler(path, record)
            if result is not None:
                results.append(result)
        return results
