"""Per-surface list of displayed annotations."""

from __future__ import annotations

from typing import AbstractSet, Iterator, List, Optional

from inline_diagnostics.host.diagnostics import Diagnostic
from inline_diagnostics.host.document import Cursor
from inline_diagnostics.runtime.telemetry import span

from .annotation import Annotation
from .policy import Visibility, should_remove


class AnnotationRegistry:
    """Live annotations, newest first.

    At most one annotation per diagnostic; callers check ``displays`` before
    adding, and ``add`` refuses a second annotation for the same diagnostic.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._annotations: List[Annotation] = []
        self._logger_name = logger_name

    def add(self, annotation: Annotation) -> Annotation:
        if annotation.diagnostic is not None and self.displays(annotation.diagnostic):
            raise ValueError(f"{annotation.diagnostic!r} is already displayed")
        self._annotations.insert(0, annotation)
        return annotation

    def displays(self, diagnostic: Diagnostic) -> bool:
        return any(a.diagnostic == diagnostic for a in self._annotations)

    def find(self, diagnostic: Diagnostic) -> Optional[Annotation]:
        for annotation in self._annotations:
            if annotation.diagnostic == diagnostic:
                return annotation
        return None

    def texts(self) -> tuple[str, ...]:
        return tuple(a.text for a in self._annotations)

    def remove_stale(
        self, cursor: Cursor, live: AbstractSet[Diagnostic]
    ) -> list[Annotation]:
        """Destroy annotations that no longer apply at ``cursor``; return them."""

        with span(
            "inline::remove_stale",
            logger_name=self._logger_name,
            component="inline",
            metadata={"cursor": cursor, "count": len(self._annotations)},
        ) as handle:
            kept: List[Annotation] = []
            removed: List[Annotation] = []
            for annotation in self._annotations:
                if should_remove(annotation, cursor, live) is Visibility.REMOVE:
                    annotation.destroy()
                    removed.append(annotation)
                else:
                    kept.append(annotation)
            self._annotations = kept
            handle.add_metadata("removed", len(removed))
            return removed

    def clear_all(self) -> None:
        with span(
            "inline::clear_all",
            logger_name=self._logger_name,
            component="inline",
            metadata={"count": len(self._annotations)},
        ):
            annotations, self._annotations = self._annotations, []
            for annotation in annotations:
                annotation.destroy()

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(tuple(self._annotations))


__all__ = ["AnnotationRegistry"]
