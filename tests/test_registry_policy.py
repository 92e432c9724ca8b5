import pytest

from inline_diagnostics.annotation import OVERLAY_TAG, Annotation
from inline_diagnostics.host import Diagnostic, EditingSurface
from inline_diagnostics.policy import Visibility, should_remove
from inline_diagnostics.registry import AnnotationRegistry


def make_surface() -> EditingSurface:
    return EditingSurface.from_text("\n".join(f"row {i}" for i in range(10)))


def make_annotation(
    surface: EditingSurface, row: int, diagnostic: Diagnostic | None
) -> Annotation:
    overlay = surface.overlays.create(
        surface.document.line_end(row),
        (row + 1, 0),
        text=f"~> message {row}",
        style="inline.error",
        properties={"tag": OVERLAY_TAG},
    )
    return Annotation(overlay, diagnostic)


def test_keep_when_live_diagnostic_spans_cursor() -> None:
    surface = make_surface()
    diagnostic = surface.diagnostics.add("error", "bad", (2, 0), (4, 3))
    annotation = make_annotation(surface, 2, diagnostic)
    live = surface.diagnostics.current()

    assert should_remove(annotation, (2, 0), live) is Visibility.KEEP
    assert should_remove(annotation, (3, 9), live) is Visibility.KEEP
    assert should_remove(annotation, (4, 3), live) is Visibility.KEEP
    assert should_remove(annotation, (4, 4), live) is Visibility.REMOVE
    assert should_remove(annotation, (1, 9), live) is Visibility.REMOVE


def test_remove_when_diagnostic_is_gone() -> None:
    surface = make_surface()
    diagnostic = surface.diagnostics.add("error", "bad", (2, 0))
    annotation = make_annotation(surface, 2, diagnostic)
    surface.diagnostics.discard(diagnostic)

    assert should_remove(annotation, (2, 0), surface.diagnostics.current()) is Visibility.REMOVE


def test_remove_when_annotation_has_no_diagnostic() -> None:
    surface = make_surface()
    annotation = make_annotation(surface, 2, None)

    assert should_remove(annotation, (2, 0), frozenset()) is Visibility.REMOVE


def test_add_inserts_at_front() -> None:
    surface = make_surface()
    registry = AnnotationRegistry()
    first = registry.add(make_annotation(surface, 1, None))
    second = registry.add(make_annotation(surface, 2, None))

    assert list(registry) == [second, first]


def test_add_rejects_second_annotation_for_same_diagnostic() -> None:
    surface = make_surface()
    diagnostic = surface.diagnostics.add("warning", "dup", (1, 0))
    registry = AnnotationRegistry()
    registry.add(make_annotation(surface, 1, diagnostic))

    with pytest.raises(ValueError):
        registry.add(make_annotation(surface, 2, diagnostic))
    assert registry.displays(diagnostic)


def test_remove_stale_partitions_and_preserves_order() -> None:
    surface = make_surface()
    wide = surface.diagnostics.add("error", "wide", (0, 0), (9, 0))
    row_two = surface.diagnostics.add("warning", "row two", (2, 0))
    row_five = surface.diagnostics.add("note", "row five", (5, 0))
    gone = Diagnostic("error", "gone", (2, 0))
    registry = AnnotationRegistry()
    for row, diagnostic in ((0, wide), (2, row_two), (5, row_five), (3, gone)):
        registry.add(make_annotation(surface, row, diagnostic))
    live = surface.diagnostics.current()

    removed = registry.remove_stale((2, 1), live)

    survivors = list(registry)
    assert [a.diagnostic for a in survivors] == [row_two, wide]
    assert {a.diagnostic for a in removed} == {row_five, gone}
    for annotation in survivors:
        assert should_remove(annotation, (2, 1), live) is Visibility.KEEP
    for annotation in removed:
        assert not annotation.live
    assert len(surface.overlays) == 2


def test_clear_all_empties_registry_from_any_state() -> None:
    surface = make_surface()
    registry = AnnotationRegistry()
    registry.clear_all()
    for row in range(4):
        registry.add(make_annotation(surface, row, None))

    registry.clear_all()

    assert len(registry) == 0
    assert registry.texts() == ()
    assert surface.overlays.overlays() == ()
