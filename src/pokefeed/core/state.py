"""View state and load phases for the Pokemon list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar

from pokefeed.core.models import PokemonDetail, PokemonEntry, PokemonSummary


class PhaseKind(str, Enum):
    """Tag shared by every load phase variant."""

    IDLE = "idle"
    LOADING = "loading"
    REFRESHING = "refreshing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Idle:
    """Nothing has been requested yet."""

    kind: ClassVar[PhaseKind] = PhaseKind.IDLE


@dataclass(frozen=True)
class Loading:
    """Initial or full load in flight; no data is trusted yet."""

    kind: ClassVar[PhaseKind] = PhaseKind.LOADING


@dataclass(frozen=True)
class Refreshing:
    """Reload in flight while the previous entries stay visible."""

    kind: ClassVar[PhaseKind] = PhaseKind.REFRESHING


@dataclass(frozen=True)
class Ready:
    """The last operation succeeded."""

    kind: ClassVar[PhaseKind] = PhaseKind.READY


@dataclass(frozen=True)
class Failed:
    """The last operation failed. Existing entries remain visible."""

    reason: str
    kind: ClassVar[PhaseKind] = PhaseKind.FAILED


LoadPhase = Idle | Loading | Refreshing | Ready | Failed


def _dedupe(entries: Iterable[PokemonEntry]) -> tuple[PokemonEntry, ...]:
    seen: set[int] = set()
    result = []
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        result.append(entry)
    return tuple(result)


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of the list screen.

    ``page`` is the last page successfully appended. ``generation`` changes
    every time the entry sequence is replaced wholesale, so detail results
    computed for an older list can be recognised and dropped.
    """

    entries: tuple[PokemonEntry, ...] = ()
    phase: LoadPhase = field(default_factory=Idle)
    page: int = 1
    generation: int = 0

    @property
    def ids(self) -> list[int]:
        return [entry.id for entry in self.entries]

    @property
    def is_busy(self) -> bool:
        """Check if a full load or refresh is in flight."""
        return isinstance(self.phase, (Loading, Refreshing))

    @property
    def error(self) -> str | None:
        """The failure reason, if the last operation failed."""
        return self.phase.reason if isinstance(self.phase, Failed) else None

    def entry(self, pokemon_id: int) -> PokemonEntry | None:
        for entry in self.entries:
            if entry.id == pokemon_id:
                return entry
        return None

    def with_phase(self, phase: LoadPhase) -> ViewState:
        return replace(self, phase=phase)

    def replace_entries(
        self,
        summaries: Iterable[PokemonSummary],
        phase: LoadPhase,
        page: int = 1,
    ) -> ViewState:
        """Swap in a fresh list. Details are dropped and the generation advances."""
        return ViewState(
            entries=_dedupe(PokemonEntry(summary) for summary in summaries),
            phase=phase,
            page=page,
            generation=self.generation + 1,
        )

    def append_entries(
        self, summaries: Iterable[PokemonSummary]
    ) -> tuple[ViewState, list[PokemonSummary]]:
        """Append summaries whose id is not present yet.

        Returns the new state and the summaries that were actually added.
        Ids already in the list keep their position and detail.
        """
        present = set(self.ids)
        added: list[PokemonSummary] = []
        for summary in summaries:
            if summary.id in present:
                continue
            present.add(summary.id)
            added.append(summary)
        entries = self.entries + tuple(PokemonEntry(summary) for summary in added)
        return replace(self, entries=entries), added

    def merge_details(
        self, details: Mapping[int, PokemonDetail], generation: int
    ) -> tuple[ViewState, int]:
        """Attach resolved details by id.

        Nothing is applied when ``generation`` no longer matches; ids that are
        missing from the current list are skipped. Returns the new state and
        the number of entries updated.
        """
        if generation != self.generation or not details:
            return self, 0

        applied = 0
        entries = []
        for entry in self.entries:
            detail = details.get(entry.id)
            if detail is not None:
                entry = entry.with_detail(detail)
                applied += 1
            entries.append(entry)
        if not applied:
            return self, 0
        return replace(self, entries=tuple(entries)), applied
