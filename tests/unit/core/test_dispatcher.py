"""Unit tests for the flag dispatcher."""

from unittest.mock import MagicMock

from pawprint.core.dispatcher import Dispatcher
from pawprint.models.result import ActionResult
from pawprint.rules.attributes import ATTRIBUTE_TABLE, Flag
from pawprint.rules.parser import OperationRecord

_HANDLER_NAMES = {
    Flag.CREATE: "create_file",
    Flag.CREATE_DIRECTORY: "create_dir",
    Flag.OWNERSHIP: "set_owner",
    Flag.PERMISSION: "set_perm",
    Flag.WRITE: "write_content",
    Flag.CLEAN: "clean",
    Flag.REMOVE: "remove",
    Flag.ATTRIBUTES: "set_attrs",
    Flag.EXCLUDE: "register_exclusion",
}


def _recording_handlers(calls: list[str]) -> MagicMock:
    """Handler set whose methods record their name and return a result."""
    handlers = MagicMock()
    for flag, name in _HANDLER_NAMES.items():

        def handler(path: str, record: OperationRecord, _name: str = name, _flag: Flag = flag):
            calls.append(_name)
            return ActionResult(path=path, action=_flag, success=True)

        getattr(handlers, name).side_effect = handler
    return handlers


class TestDispatcher:
    """Tests for Dispatcher."""

    def test_order_is_ascending(self) -> None:
        dispatcher = Dispatcher(MagicMock())

        values = [flag.value for flag in dispatcher.order]
        assert values == sorted(values)
        assert set(dispatcher.order) == set(_HANDLER_NAMES)

    def test_file_rule_order(self) -> None:
        """Creation, then ownership, then mode, then content."""
        calls: list[str] = []
        dispatcher = Dispatcher(_recording_handlers(calls))

        results = dispatcher.dispatch("/tmp/f", OperationRecord(flags=ATTRIBUTE_TABLE["f"]))

        assert calls == ["create_file", "set_owner", "set_perm", "write_content"]
        assert [r.action for r in results] == [
            Flag.CREATE,
            Flag.OWNERSHIP,
            Flag.PERMISSION,
            Flag.WRITE,
        ]

    def test_directory_removal_rule_order(self) -> None:
        calls: list[str] = []
        dispatcher = Dispatcher(_recording_handlers(calls))

        dispatcher.dispatch("/tmp/d", OperationRecord(flags=ATTRIBUTE_TABLE["D"]))

        assert calls == ["create_dir", "set_owner", "set_perm", "clean", "remove"]

    def test_modifiers_have_no_handler(self) -> None:
        """Append and traversal flags are read by handlers, not dispatched."""
        calls: list[str] = []
        dispatcher = Dispatcher(_recording_handlers(calls))

        results = dispatcher.dispatch(
            "/tmp/f",
            OperationRecord(flags=Flag.APPEND | Flag.NO_FOLLOW | Flag.RECURSIVE),
        )

        assert calls == []
        assert results == []

    def test_failure_does_not_short_circuit(self) -> None:
        calls: list[str] = []
        handlers = _recording_handlers(calls)
        handlers.create_file.side_effect = lambda path, record: (
            calls.append("create_file")
            or ActionResult(path=path, action=Flag.CREATE, success=False, error="boom")
        )
        dispatcher = Dispatcher(handlers)

        results = dispatcher.dispatch("/tmp/f", OperationRecord(flags=ATTRIBUTE_TABLE["f"]))

        assert calls == ["create_file", "set_owner", "set_perm", "write_content"]
        assert results[0].failed
        assert all(r.success for r in results[1:])

    def test_none_results_dropped(self) -> None:
        handlers = MagicMock()
        handlers.create_dir.return_value = None
        handlers.set_owner.return_value = None
        handlers.set_perm.return_value = None
        handlers.clean.return_value = None
        dispatcher = Dispatcher(handlers)

        assert dispatcher.dispatch("/tmp/d", OperationRecord(flags=ATTRIBUTE_TABLE["d"])) == []

    def test_same_record_for_every_path(self) -> None:
        handlers = MagicMock()
        handlers.remove.return_value = None
        dispatcher = Dispatcher(handlers)
        record = OperationRecord(flags=Flag.REMOVE)

        dispatcher.dispatch("/tmp/a", record)
        dispatcher.dispatch("/tmp/b", record)

        assert [c.args for c in handlers.remove.call_args_list] == [
            ("/tmp/a", record),
            ("/tmp/b", record),
        ]
