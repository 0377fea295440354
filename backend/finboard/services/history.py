from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable


def _to_dec(v) -> Decimal:
    return Decimal(str(v))


@dataclass(frozen=True)
class AnnotatedEntry:
    id: Any
    debt_id: Any
    amount: Decimal
    note: str | None
    logged_at: datetime
    previous_amount: Decimal
    delta: Decimal
    is_initial: bool

    @property
    def kind(self) -> str:
        # initial | increase | payment | unchanged
        if self.is_initial:
            return "initial"
        if self.delta > 0:
            return "increase"
        if self.delta < 0:
            return "payment"
        return "unchanged"


def compute_history(entries: Iterable[Any]) -> list[AnnotatedEntry]:
    """Annotate a debt's amount log with the previous amount and the delta.

    Entries are ordered by ``logged_at``; ``sorted`` is stable, so entries
    sharing a timestamp keep the order they were given in. The first entry
    is measured against a zero baseline, so its delta is its own amount and
    it is flagged ``is_initial``.
    """
    ordered = sorted(entries, key=lambda e: e.logged_at)

    out: list[AnnotatedEntry] = []
    prev = Decimal("0")
    for idx, e in enumerate(ordered):
        amt = _to_dec(e.amount)
        out.append(
            AnnotatedEntry(
                id=e.id,
                debt_id=e.debt_id,
                amount=amt,
                note=e.note,
                logged_at=e.logged_at,
                previous_amount=prev,
                delta=amt - prev,
                is_initial=idx == 0,
            )
        )
        prev = amt
    return out
