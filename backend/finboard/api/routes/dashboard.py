from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finboard.api.deps import db, current_user
from finboard.core.config import settings
from finboard.models.user import User
from finboard.schemas.dashboard import DashboardOut
from finboard.services.currency import Currency
from finboard.services.dashboard import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard(
    month: str | None = Query(None),
    currency: Currency | None = Query(None),
    s: Session = Depends(db),
    u: User = Depends(current_user),
):
    return build_dashboard(s, u.id, month, currency or settings.default_currency)
