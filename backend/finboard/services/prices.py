from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

import httpx

from finboard.core.config import settings
from finboard.utils.timezone import utcnow

logger = logging.getLogger(__name__)

CRYPTO_IDS = ("bitcoin", "ethereum", "cardano")

# per troy ounce, USD; no free metals feed is wired up
MOCK_GOLD_PRICE = Decimal("2300")
MOCK_SILVER_PRICE = Decimal("28")

GRAMS_PER_TROY_OUNCE = Decimal("31.1035")
METALS = ("gold", "silver")


@dataclass(frozen=True)
class AssetPrices:
    bitcoin: Decimal | None = None
    ethereum: Decimal | None = None
    cardano: Decimal | None = None
    gold: Decimal | None = MOCK_GOLD_PRICE
    silver: Decimal | None = MOCK_SILVER_PRICE
    error: str | None = None

    def by_type(self) -> dict[str, Decimal]:
        out = {
            "bitcoin": self.bitcoin,
            "ethereum": self.ethereum,
            "cardano": self.cardano,
            "gold": self.gold,
            "silver": self.silver,
        }
        return {k: v for k, v in out.items() if v is not None}


def fetch_asset_prices(client: httpx.Client | None = None) -> AssetPrices:
    own = client is None
    if own:
        client = httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True)
    try:
        r = client.get(settings.price_api_url, params={"ids": ",".join(CRYPTO_IDS), "vs_currencies": "usd"})
        r.raise_for_status()
        data = r.json()
    finally:
        if own:
            client.close()

    if not isinstance(data, dict):
        raise ValueError(f"unexpected price payload: {type(data).__name__}")

    def _usd(coin: str) -> Decimal | None:
        entry = data.get(coin)
        if entry is None:
            return None
        if not isinstance(entry, dict):
            raise ValueError(f"unexpected price entry for {coin}: {entry!r}")
        v = entry.get("usd")
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError(f"unexpected usd price for {coin}: {v!r}")
        p = Decimal(str(v))
        if not p.is_finite() or p < 0:
            raise ValueError(f"usd price out of range for {coin}: {v!r}")
        return p

    return AssetPrices(
        bitcoin=_usd("bitcoin"),
        ethereum=_usd("ethereum"),
        cardano=_usd("cardano"),
    )


_lock = threading.Lock()
_cached: AssetPrices | None = None
_cached_at: datetime | None = None


def get_asset_prices(client: httpx.Client | None = None) -> AssetPrices:
    global _cached, _cached_at

    now = utcnow()
    with _lock:
        if (
            _cached is not None
            and _cached_at is not None
            and (now - _cached_at) < timedelta(seconds=settings.price_cache_seconds)
        ):
            return _cached

    try:
        prices = fetch_asset_prices(client)
    except (httpx.HTTPError, ValueError, InvalidOperation) as e:
        logger.warning("asset price fetch failed: %s", e)
        # failures are not cached so the next call retries
        return AssetPrices(error="Failed to fetch some prices. Displayed values may be outdated or estimates.")

    with _lock:
        _cached = prices
        _cached_at = now
    return prices


def reset_cache() -> None:
    global _cached, _cached_at
    with _lock:
        _cached = None
        _cached_at = None


@dataclass(frozen=True)
class AssetValuation:
    id: Any
    type: str
    quantity: Decimal
    unit: str
    price_per_unit: Decimal
    currency: str
    auto_update: bool
    date: Any
    revalued: bool = False

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.price_per_unit

    # read by the monthly aggregator
    @property
    def amount(self) -> Decimal:
        return self.total_value


def unit_price(asset_type: str, unit: str, prices: AssetPrices) -> Decimal | None:
    p = prices.by_type().get(asset_type)
    if p is None:
        return None
    if asset_type in METALS and (unit or "").lower() in ("grams", "gram", "g"):
        return p / GRAMS_PER_TROY_OUNCE
    return p


def revalue_assets(assets: Iterable[Any], prices: AssetPrices) -> list[AssetValuation]:
    out: list[AssetValuation] = []
    for a in assets:
        v = AssetValuation(
            id=a.id,
            type=a.type,
            quantity=Decimal(str(a.quantity)),
            unit=a.unit,
            price_per_unit=Decimal(str(a.price_per_unit)),
            currency=a.currency,
            auto_update=bool(a.auto_update),
            date=a.date,
        )
        if v.auto_update:
            live = unit_price(v.type, v.unit, prices)
            if live is not None:
                v = replace(v, price_per_unit=live, currency="USD", revalued=True)
        out.append(v)
    return out
