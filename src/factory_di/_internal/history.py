from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

UNKNOWN_LOCATION = "?"


@dataclass(frozen=True, slots=True)
class ResolutionRecord:
    """One item visited while resolving or registering."""

    name: str
    filepath: str | None = None
    register_source: str | None = None
    not_found: bool = False


ResolutionHistory: TypeAlias = tuple[ResolutionRecord, ...]


def add_to_history(history: ResolutionHistory, item_name: str, source: Any = None) -> ResolutionHistory:
    """Return a new history with a record for ``item_name`` appended.

    Args:
        history: Records accumulated so far. Never modified.
        item_name: Name of the visited item.
        source: Object carrying ``filename``/``register_source``/``is_not_found``
            metadata, usually a decorated or resolved factory. ``None`` records
            the name without location data.

    """
    record = ResolutionRecord(
        name=item_name,
        filepath=getattr(source, "filename", None),
        register_source=getattr(source, "register_source", None),
        not_found=bool(getattr(source, "is_not_found", False)),
    )
    return (*history, record)


def render_history_trace(history: Iterable[ResolutionRecord]) -> str:
    """Render records newest first, one ``at``/``registered in`` block each."""
    return "".join(
        f"\n    at {record.name} ({record.filepath or UNKNOWN_LOCATION})"
        f"\n        registered in [{record.register_source or UNKNOWN_LOCATION}]"
        for record in reversed(tuple(history))
    )
