import uuid

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select

from finboard.api.deps import db, current_user
from finboard.models.income import Income
from finboard.models.user import User
from finboard.schemas.income import IncomeCreate, IncomeUpdate, IncomeOut, IncomeStatus
from finboard.schemas.stats import IncomeSummaryOut
from finboard.services.audit import log_event
from finboard.services.monthly import filter_by_month
from finboard.services.summaries import income_summary

router = APIRouter(prefix="/incomes", tags=["incomes"])


def _require_income(s: Session, user: User, income_id: uuid.UUID) -> Income:
    inc = s.execute(select(Income).where(Income.id == income_id, Income.user_id == user.id)).scalar_one_or_none()
    if inc is None:
        raise HTTPException(status_code=404, detail="income_not_found")
    return inc


def _details(inc: Income) -> dict:
    return {
        "title": inc.title,
        "amount": str(inc.amount),
        "currency": inc.currency,
        "category": inc.category,
        "status": inc.status,
        "date": str(inc.date),
    }


@router.get("", response_model=list[IncomeOut])
def list_incomes(
    month: str | None = Query(None),
    status: IncomeStatus | None = Query(None),
    category: str | None = Query(None),
    s: Session = Depends(db),
    u: User = Depends(current_user),
):
    q = select(Income).where(Income.user_id == u.id)
    if status is not None:
        q = q.where(Income.status == status)
    if category:
        q = q.where(Income.category == category.strip().lower())
    q = q.order_by(Income.date.desc(), Income.created_at.desc())
    return filter_by_month(s.execute(q).scalars().all(), month)


@router.get("/summary", response_model=IncomeSummaryOut)
def summary(month: str | None = Query(None), s: Session = Depends(db), u: User = Depends(current_user)):
    rows = s.execute(select(Income).where(Income.user_id == u.id)).scalars().all()
    return income_summary(rows, month)


@router.post("", response_model=IncomeOut, status_code=201)
def add_income(body: IncomeCreate, s: Session = Depends(db), u: User = Depends(current_user)):
    inc = Income(user_id=u.id, **body.model_dump())
    s.add(inc)
    s.commit()
    s.refresh(inc)
    log_event(s, user_id=u.id, action="income.create", entity_type="income", entity_id=inc.id, details=_details(inc))
    return inc


@router.patch("/{income_id}", response_model=IncomeOut)
def update_income(income_id: uuid.UUID, body: IncomeUpdate, s: Session = Depends(db), u: User = Depends(current_user)):
    inc = _require_income(s, u, income_id)
    for k, v in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(inc, k, v)
    s.add(inc)
    s.commit()
    s.refresh(inc)
    log_event(s, user_id=u.id, action="income.update", entity_type="income", entity_id=inc.id, details=_details(inc))
    return inc


@router.delete("/{income_id}")
def delete_income(income_id: uuid.UUID, s: Session = Depends(db), u: User = Depends(current_user)):
    inc = _require_income(s, u, income_id)
    details = _details(inc)
    s.delete(inc)
    s.commit()
    log_event(s, user_id=u.id, action="income.delete", entity_type="income", entity_id=income_id, details=details)
    return {"ok": True}
