from typing import List

import pytest

from inline_diagnostics.host import (
    POST_COMMAND,
    CommandEvent,
    CommandLoop,
    CommandRef,
    Diagnostic,
    DiagnosticStore,
    EditingSurface,
    PositionError,
    TextDocument,
)
from inline_diagnostics.severity import Severity


def make_surface() -> EditingSurface:
    return EditingSurface.from_text("alpha\nbeta\n\ngamma", name="doc.txt")


def test_document_from_text_keeps_trailing_empty_row() -> None:
    document = TextDocument.from_text("a\nb\n")

    assert document.snapshot() == ("a", "b", "")
    assert document.last_row == 2
    assert TextDocument.from_text("").line_count == 1


def test_document_rejects_out_of_range_positions() -> None:
    document = TextDocument.from_text("abc")

    with pytest.raises(PositionError) as excinfo:
        document.ensure((0, 4))

    assert excinfo.value.cursor == (0, 4)
    assert document.clamp(5, 9) == (0, 3)


def test_commands_clamp_and_fire_post_command() -> None:
    surface = make_surface()
    events: List[object] = []
    surface.hooks.subscribe(POST_COMMAND, events.append)
    loop = CommandLoop(surface)

    loop.execute("previous-line")
    loop.execute("line-end")
    loop.execute("next-line")
    loop.execute("next-line")

    assert surface.cursor == (2, 0)
    assert len(events) == 4
    first = events[0]
    assert isinstance(first, CommandEvent)
    assert first.command == "previous-line"
    assert first.cursor == first.previous == (0, 0)
    assert events[1] == CommandEvent(command="line-end", cursor=(0, 5), previous=(0, 0))


def test_buffer_motion_commands() -> None:
    surface = make_surface()
    loop = CommandLoop(surface)

    loop.execute("buffer-end")
    assert surface.cursor == (3, 5)

    loop.execute("goto", 1, 99)
    assert surface.cursor == (1, 4)

    loop.execute("buffer-start")
    assert surface.cursor == (0, 0)


def test_command_registration_errors() -> None:
    loop = CommandLoop(make_surface())

    with pytest.raises(KeyError):
        loop.execute("does-not-exist")
    with pytest.raises(ValueError):
        loop.register(CommandRef("goto", lambda surface: None))
    with pytest.raises(ValueError):
        CommandRef("", lambda surface: None)

    loop.register(CommandRef("goto", lambda surface: "custom"), replace=True)
    assert loop.execute("goto") == "custom"


def test_hook_bus_unsubscribe() -> None:
    surface = make_surface()
    calls: List[object] = []
    surface.hooks.subscribe(POST_COMMAND, calls.append)
    surface.hooks.unsubscribe(POST_COMMAND, calls.append)

    CommandLoop(surface).execute("next-line")

    assert calls == []


def test_diagnostic_validation() -> None:
    with pytest.raises(ValueError):
        Diagnostic("error", "", (0, 0))
    with pytest.raises(ValueError):
        Diagnostic("error", "backwards", (2, 0), (1, 0))
    with pytest.raises(ValueError):
        Diagnostic("nonsense", "msg", (0, 0))


def test_diagnostic_from_checker_record() -> None:
    diagnostic = Diagnostic.from_mapping(
        {
            "line": 3,
            "column": 5,
            "end_line": 3,
            "end_column": 9,
            "severity": "W",
            "message": "unused import",
            "code": "F401",
            "checker": "ruff",
        }
    )

    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.begin == (2, 4)
    assert diagnostic.end == (2, 8)
    assert diagnostic.error_id == "F401"
    assert diagnostic.contains((2, 8))
    assert not diagnostic.contains((2, 9))


def test_diagnostic_record_without_end_column() -> None:
    record = {"line": 3, "column": 5, "end_line": 3, "message": "m"}
    document = TextDocument.from_text("a\nb\nvalue = thing\nd\n")

    row_wide = Diagnostic.from_mapping(record)
    measured = Diagnostic.from_mapping(record, document)
    multi_row = Diagnostic.from_mapping({**record, "end_line": 4})

    assert row_wide.end is None
    assert row_wide.contains((2, 0))
    assert measured.begin == (2, 4)
    assert measured.end == document.line_end(2) == (2, 13)
    assert multi_row.end == (4, 0)
    assert multi_row.contains((3, 1))


def test_store_lookup_by_position() -> None:
    store = DiagnosticStore()
    line_wide = store.add("error", "whole row", (1, 2))
    ranged = store.add("note", "ranged", (1, 0), (1, 3))
    store.add("note", "ranged", (1, 0), (1, 3))

    assert store.at((1, 0)) == (line_wide, ranged)
    assert store.at((1, 4)) == (line_wide,)
    assert store.at((0, 0)) == ()
    assert len(store) == 2
    assert store.current() == frozenset({line_wide, ranged})
