import uuid

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select

from finboard.api.deps import db, current_user
from finboard.models.debt import Debt, DebtAmountHistory
from finboard.models.user import User
from finboard.schemas.debt import DebtCreate, DebtUpdate, DebtOut, DebtHistoryOut, DebtStatus, DebtType
from finboard.schemas.stats import DebtSummaryOut
from finboard.services.audit import log_event
from finboard.services.debts import create_debt, update_debt_amount
from finboard.services.history import compute_history
from finboard.services.monthly import filter_by_month
from finboard.services.summaries import debt_summary
from finboard.utils.timezone import today_reporting

router = APIRouter(prefix="/debts", tags=["debts"])


def _require_debt(s: Session, user: User, debt_id: uuid.UUID) -> Debt:
    d = s.execute(select(Debt).where(Debt.id == debt_id, Debt.user_id == user.id)).scalar_one_or_none()
    if d is None:
        raise HTTPException(status_code=404, detail="debt_not_found")
    return d


def _details(d: Debt) -> dict:
    return {
        "title": d.title,
        "creditor": d.creditor,
        "amount": str(d.amount),
        "currency": d.currency,
        "due_date": str(d.due_date) if d.due_date is not None else None,
        "status": d.status,
        "type": d.type,
    }


@router.get("", response_model=list[DebtOut])
def list_debts(
    month: str | None = Query(None),
    status: DebtStatus | None = Query(None),
    type: DebtType | None = Query(None),
    s: Session = Depends(db),
    u: User = Depends(current_user),
):
    q = select(Debt).where(Debt.user_id == u.id).options(selectinload(Debt.amount_history))
    if status is not None:
        q = q.where(Debt.status == status)
    if type is not None:
        q = q.where(Debt.type == type)
    # debts without a due date sort last
    q = q.order_by(Debt.due_date.is_(None), Debt.due_date.asc(), Debt.created_at.asc())
    return filter_by_month(s.execute(q).scalars().all(), month)


@router.get("/summary", response_model=DebtSummaryOut)
def summary(month: str | None = Query(None), s: Session = Depends(db), u: User = Depends(current_user)):
    rows = s.execute(select(Debt).where(Debt.user_id == u.id)).scalars().all()
    return debt_summary(rows, month)


@router.post("", response_model=DebtOut, status_code=201)
def add_debt(body: DebtCreate, s: Session = Depends(db), u: User = Depends(current_user)):
    d = Debt(
        user_id=u.id,
        title=body.title,
        creditor=body.creditor,
        amount=body.amount,
        currency=body.currency,
        due_date=body.due_date,
        status=body.status,
        type=body.type,
        date=body.date or today_reporting(),
    )
    create_debt(s, d, note=body.note)
    log_event(s, user_id=u.id, action="debt.create", entity_type="debt", entity_id=d.id, details=_details(d))
    return d


@router.patch("/{debt_id}", response_model=DebtOut)
def update_debt(debt_id: uuid.UUID, body: DebtUpdate, s: Session = Depends(db), u: User = Depends(current_user)):
    d = _require_debt(s, u, debt_id)
    previous = str(d.amount)

    fields = body.model_dump(exclude_unset=True, exclude_none=True, exclude={"amount", "note"})
    for k, v in fields.items():
        setattr(d, k, v)
    # due_date may be cleared explicitly
    if "due_date" in body.model_fields_set and body.due_date is None:
        d.due_date = None
    s.add(d)

    logged = None
    if body.amount is not None:
        logged = update_debt_amount(s, d, body.amount, note=body.note)
    s.commit()
    s.refresh(d)

    details = _details(d)
    if logged is not None:
        details["previous_amount"] = previous
    log_event(s, user_id=u.id, action="debt.update", entity_type="debt", entity_id=d.id, details=details)
    return d


@router.get("/{debt_id}/history", response_model=DebtHistoryOut)
def debt_history(debt_id: uuid.UUID, s: Session = Depends(db), u: User = Depends(current_user)):
    d = _require_debt(s, u, debt_id)
    rows = (
        s.execute(
            select(DebtAmountHistory)
            .where(DebtAmountHistory.debt_id == d.id)
            .order_by(DebtAmountHistory.logged_at)
        )
        .scalars()
        .all()
    )
    entries = compute_history(rows)
    return {
        "debt_id": d.id,
        "title": d.title,
        "currency": d.currency,
        "entries": [
            {
                "id": e.id,
                "amount": float(e.amount),
                "previous_amount": float(e.previous_amount),
                "delta": float(e.delta),
                "kind": e.kind,
                "note": e.note,
                "logged_at": e.logged_at,
            }
            for e in entries
        ],
    }


@router.delete("/{debt_id}")
def delete_debt(debt_id: uuid.UUID, s: Session = Depends(db), u: User = Depends(current_user)):
    d = _require_debt(s, u, debt_id)
    details = _details(d)
    s.delete(d)
    s.commit()
    log_event(s, user_id=u.id, action="debt.delete", entity_type="debt", entity_id=debt_id, details=details)
    return {"ok": True}
