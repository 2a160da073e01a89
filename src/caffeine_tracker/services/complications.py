"""Complication content built from the drink ledger."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from caffeine_tracker.domain.timeline import (
    ComplicationEntry,
    ComplicationKind,
    ComplicationValue,
    TimelineSnapshot,
)
from caffeine_tracker.services.ledger import DrinkLedger
from caffeine_tracker.services.timeline import (
    DEFAULT_SPAN,
    DEFAULT_STRIDE,
    sample,
    snapshot_at,
)

# Preview entries show a time when every drink has long decayed.
SAMPLE_OFFSET = timedelta(hours=25)
SIGNIFICANT_DIGITS = 3


@dataclass
class ComplicationService:
    """Supplies current, future and preview complication entries."""

    ledger: DrinkLedger

    def timeline_end(self, now: datetime | None = None) -> datetime:
        """Return the last time a timeline is provided for."""
        return (now or self.ledger.clock()) + DEFAULT_SPAN

    def current_entry(
        self, kind: ComplicationKind, at: datetime | None = None
    ) -> ComplicationEntry:
        """Return the entry for now, or for ``at`` when given."""
        at = at or self.ledger.clock()
        return build_entry(kind, snapshot_at(self.ledger.records, at, self.ledger.tz))

    def entries_after(
        self, kind: ComplicationKind, after: datetime, limit: int
    ) -> list[ComplicationEntry]:
        """Return entries every five minutes for the day following ``after``."""
        timeline = sample(
            self.ledger,
            start=after,
            end=after + DEFAULT_SPAN,
            stride=DEFAULT_STRIDE,
            limit=limit,
        )
        return [build_entry(kind, snapshot) for _, snapshot in timeline]

    def sample_entry(self, kind: ComplicationKind) -> ComplicationEntry:
        """Return a preview entry for the watch-face editor."""
        return self.current_entry(kind, self.ledger.clock() + SAMPLE_OFFSET)


def build_entry(
    kind: ComplicationKind, snapshot: TimelineSnapshot
) -> ComplicationEntry:
    """Format the snapshot values a complication kind displays."""
    caffeine = ComplicationValue(
        unit="mg",
        text=format_amount(snapshot.caffeine_mg),
        color=snapshot.caffeine_severity.color,
    )
    cups = ComplicationValue(
        unit="cups",
        text=format_amount(snapshot.cups),
        color=snapshot.cups_severity.color,
    )
    ounces = ComplicationValue(
        unit="oz",
        text=format_amount(snapshot.volume_oz),
        color=snapshot.volume_severity.color,
    )
    values = {
        ComplicationKind.CAFFEINE: (caffeine,),
        ComplicationKind.CUPS: (cups,),
        ComplicationKind.BOTH: (caffeine, cups),
        ComplicationKind.OUNCES: (ounces,),
    }[kind]
    return ComplicationEntry(at=snapshot.at, kind=kind, values=values)


def format_amount(value: float) -> str:
    """Format a number with at most three significant digits."""
    if value == 0 or not math.isfinite(value):
        return "0" if value == 0 else str(value)
    decimals = SIGNIFICANT_DIGITS - 1 - math.floor(math.log10(abs(value)))
    rounded = round(value, decimals)
    if decimals <= 0:
        return f"{int(rounded):,}"
    return f"{rounded:,.{decimals}f}".rstrip("0").rstrip(".")
