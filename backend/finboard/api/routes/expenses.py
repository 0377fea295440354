import uuid

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select

from finboard.api.deps import db, current_user
from finboard.models.expense import Expense
from finboard.models.user import User
from finboard.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseOut, ExpenseStatus, ExpenseType
from finboard.schemas.stats import ExpenseSummaryOut
from finboard.services.audit import log_event
from finboard.services.monthly import filter_by_month
from finboard.services.summaries import expense_summary

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _require_expense(s: Session, user: User, expense_id: uuid.UUID) -> Expense:
    ex = s.execute(select(Expense).where(Expense.id == expense_id, Expense.user_id == user.id)).scalar_one_or_none()
    if ex is None:
        raise HTTPException(status_code=404, detail="expense_not_found")
    return ex


def _details(ex: Expense) -> dict:
    return {
        "title": ex.title,
        "amount": str(ex.amount),
        "currency": ex.currency,
        "category": ex.category,
        "status": ex.status,
        "type": ex.type,
        "date": str(ex.date),
    }


@router.get("", response_model=list[ExpenseOut])
def list_expenses(
    month: str | None = Query(None),
    status: ExpenseStatus | None = Query(None),
    type: ExpenseType | None = Query(None),
    s: Session = Depends(db),
    u: User = Depends(current_user),
):
    q = select(Expense).where(Expense.user_id == u.id)
    if status is not None:
        q = q.where(Expense.status == status)
    if type is not None:
        q = q.where(Expense.type == type)
    q = q.order_by(Expense.date.desc(), Expense.created_at.desc())
    return filter_by_month(s.execute(q).scalars().all(), month)


@router.get("/summary", response_model=ExpenseSummaryOut)
def summary(month: str | None = Query(None), s: Session = Depends(db), u: User = Depends(current_user)):
    rows = s.execute(select(Expense).where(Expense.user_id == u.id)).scalars().all()
    return expense_summary(rows, month)


@router.post("", response_model=ExpenseOut, status_code=201)
def add_expense(body: ExpenseCreate, s: Session = Depends(db), u: User = Depends(current_user)):
    ex = Expense(user_id=u.id, **body.model_dump())
    s.add(ex)
    s.commit()
    s.refresh(ex)
    log_event(s, user_id=u.id, action="expense.create", entity_type="expense", entity_id=ex.id, details=_details(ex))
    return ex


@router.patch("/{expense_id}", response_model=ExpenseOut)
def update_expense(expense_id: uuid.UUID, body: ExpenseUpdate, s: Session = Depends(db), u: User = Depends(current_user)):
    ex = _require_expense(s, u, expense_id)
    for k, v in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(ex, k, v)
    s.add(ex)
    s.commit()
    s.refresh(ex)
    log_event(s, user_id=u.id, action="expense.update", entity_type="expense", entity_id=ex.id, details=_details(ex))
    return ex


@router.delete("/{expense_id}")
def delete_expense(expense_id: uuid.UUID, s: Session = Depends(db), u: User = Depends(current_user)):
    ex = _require_expense(s, u, expense_id)
    details = _details(ex)
    s.delete(ex)
    s.commit()
    log_event(s, user_id=u.id, action="expense.delete", entity_type="expense", entity_id=expense_id, details=details)
    return {"ok": True}
