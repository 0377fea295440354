import uuid

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select

from finboard.api.deps import db, current_user
from finboard.models.asset import Asset
from finboard.models.user import User
from finboard.schemas.asset import AssetCreate, AssetUpdate, AssetOut
from finboard.schemas.stats import AssetSummaryOut
from finboard.services.audit import log_event
from finboard.services.monthly import filter_by_month
from finboard.services.prices import AssetPrices, get_asset_prices
from finboard.services.summaries import asset_summary
from finboard.utils.timezone import today_reporting

router = APIRouter(prefix="/assets", tags=["assets"])


def _require_asset(s: Session, user: User, asset_id: uuid.UUID) -> Asset:
    a = s.execute(select(Asset).where(Asset.id == asset_id, Asset.user_id == user.id)).scalar_one_or_none()
    if a is None:
        raise HTTPException(status_code=404, detail="asset_not_found")
    return a


def _details(a: Asset) -> dict:
    return {
        "type": a.type,
        "quantity": str(a.quantity),
        "unit": a.unit,
        "price_per_unit": str(a.price_per_unit),
        "currency": a.currency,
        "auto_update": a.auto_update,
    }


@router.get("", response_model=list[AssetOut])
def list_assets(
    month: str | None = Query(None),
    type: str | None = Query(None),
    s: Session = Depends(db),
    u: User = Depends(current_user),
):
    q = select(Asset).where(Asset.user_id == u.id)
    if type:
        q = q.where(Asset.type == type.strip().lower())
    q = q.order_by(Asset.created_at.desc())
    return filter_by_month(s.execute(q).scalars().all(), month)


@router.get("/summary", response_model=AssetSummaryOut)
def summary(month: str | None = Query(None), s: Session = Depends(db), u: User = Depends(current_user)):
    rows = s.execute(select(Asset).where(Asset.user_id == u.id)).scalars().all()
    prices = get_asset_prices() if any(a.auto_update for a in rows) else AssetPrices()
    return asset_summary(rows, month, prices)


@router.post("", response_model=AssetOut, status_code=201)
def add_asset(body: AssetCreate, s: Session = Depends(db), u: User = Depends(current_user)):
    data = body.model_dump()
    data["date"] = body.date or today_reporting()
    a = Asset(user_id=u.id, **data)
    s.add(a)
    s.commit()
    s.refresh(a)
    log_event(s, user_id=u.id, action="asset.create", entity_type="asset", entity_id=a.id, details=_details(a))
    return a


@router.patch("/{asset_id}", response_model=AssetOut)
def update_asset(asset_id: uuid.UUID, body: AssetUpdate, s: Session = Depends(db), u: User = Depends(current_user)):
    a = _require_asset(s, u, asset_id)
    for k, v in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(a, k, v)
    s.add(a)
    s.commit()
    s.refresh(a)
    log_event(s, user_id=u.id, action="asset.update", entity_type="asset", entity_id=a.id, details=_details(a))
    return a


@router.delete("/{asset_id}")
def delete_asset(asset_id: uuid.UUID, s: Session = Depends(db), u: User = Depends(current_user)):
    a = _require_asset(s, u, asset_id)
    details = _details(a)
    s.delete(a)
    s.commit()
    log_event(s, user_id=u.id, action="asset.delete", entity_type="asset", entity_id=asset_id, details=details)
    return {"ok": True}
