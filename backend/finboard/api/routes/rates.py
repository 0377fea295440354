from fastapi import APIRouter, Depends

from finboard.api.deps import current_user
from finboard.schemas.rates import FxRateOut, AssetPricesOut
from finboard.services.currency import get_usd_try_rate, cached_rate
from finboard.services.prices import get_asset_prices

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/fx", response_model=FxRateOut)
def fx_rate(u=Depends(current_user)):
    rate = get_usd_try_rate()
    _, fetched_at = cached_rate()
    return FxRateOut(rate=float(rate), fetched_at=fetched_at)


@router.get("/prices", response_model=AssetPricesOut)
def asset_prices(u=Depends(current_user)):
    p = get_asset_prices()
    return AssetPricesOut(
        bitcoin=float(p.bitcoin) if p.bitcoin is not None else None,
        ethereum=float(p.ethereum) if p.ethereum is not None else None,
        cardano=float(p.cardano) if p.cardano is not None else None,
        gold=float(p.gold) if p.gold is not None else None,
        silver=float(p.silver) if p.silver is not None else None,
        error=p.error,
    )
