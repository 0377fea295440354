from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from finboard.models.debt import Debt, DebtAmountHistory
from finboard.utils.timezone import utcnow

DEFAULT_NOTE = "Updated amount"
INITIAL_NOTE = "Initial amount"
CENTS = Decimal("0.01")


def _to_dec(v) -> Decimal:
    # amounts are stored as Numeric(14, 2)
    return Decimal(str(v)).quantize(CENTS, rounding=ROUND_HALF_UP)


def log_amount(s: Session, debt: Debt, amount, note: str | None) -> DebtAmountHistory:
    row = DebtAmountHistory(
        debt_id=debt.id,
        user_id=debt.user_id,
        amount=_to_dec(amount),
        note=note,
        logged_at=utcnow(),
    )
    debt.amount_history.append(row)
    s.add(row)
    return row


def create_debt(s: Session, debt: Debt, note: str | None = None) -> Debt:
    debt.amount = _to_dec(debt.amount)
    s.add(debt)
    s.flush()
    log_amount(s, debt, debt.amount, note or INITIAL_NOTE)
    s.commit()
    s.refresh(debt)
    return debt


def update_debt_amount(s: Session, debt: Debt, new_amount, note: str | None = None) -> DebtAmountHistory | None:
    """Set a debt's amount, appending to its history when the amount moves.

    Returns the new history row, or None when the amount is unchanged.
    The caller commits.
    """
    new_amt = _to_dec(new_amount)
    if _to_dec(debt.amount) == new_amt:
        return None
    debt.amount = new_amt
    s.add(debt)
    return log_amount(s, debt, new_amt, note or DEFAULT_NOTE)
