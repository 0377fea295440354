from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Literal

import httpx

from finboard.core.config import settings
from finboard.utils.timezone import utcnow

logger = logging.getLogger(__name__)

Currency = Literal["USD", "TRY"]
CURRENCIES: tuple[str, ...] = ("USD", "TRY")


class FxUnavailableError(RuntimeError):
    pass


def convert(amount, from_currency: str, to_currency: str, usd_try_rate) -> Decimal:
    amt = Decimal(str(amount))
    if from_currency == to_currency:
        return amt

    rate = Decimal(str(usd_try_rate)) if usd_try_rate is not None else Decimal("0")
    if rate <= 0:
        raise FxUnavailableError("fx_rate_unavailable")

    if from_currency == "USD" and to_currency == "TRY":
        return amt * rate
    if from_currency == "TRY" and to_currency == "USD":
        return amt / rate
    raise ValueError(f"unsupported currency pair {from_currency}->{to_currency}")


def fetch_usd_try_rate(client: httpx.Client | None = None) -> Decimal:
    own = client is None
    if own:
        client = httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True)
    try:
        r = client.get(settings.fx_api_url)
        r.raise_for_status()
        data = r.json()
    finally:
        if own:
            client.close()

    rates = data.get("rates") if isinstance(data, dict) else None
    rate = rates.get("TRY") if isinstance(rates, dict) else None
    if rate is None or isinstance(rate, bool):
        raise FxUnavailableError("TRY exchange rate not found in response")
    try:
        value = Decimal(str(rate))
    except InvalidOperation:
        raise FxUnavailableError(f"TRY exchange rate is not a number: {rate!r}") from None
    if not value.is_finite() or value <= 0:
        raise FxUnavailableError(f"TRY exchange rate out of range: {rate!r}")
    return value


_lock = threading.Lock()
_cached_rate: Decimal | None = None
_cached_at: datetime | None = None


def get_usd_try_rate(client: httpx.Client | None = None) -> Decimal:
    """USD->TRY rate, refetched at most once per ``fx_cache_seconds``.

    A failed fetch falls back to the last good rate; with nothing cached
    it raises FxUnavailableError.
    """
    global _cached_rate, _cached_at

    now = utcnow()
    with _lock:
        if (
            _cached_rate is not None
            and _cached_at is not None
            and (now - _cached_at) < timedelta(seconds=settings.fx_cache_seconds)
        ):
            return _cached_rate

    try:
        rate = fetch_usd_try_rate(client)
    except (httpx.HTTPError, ValueError, FxUnavailableError) as e:
        with _lock:
            stale = _cached_rate
        if stale is None:
            logger.exception("fx rate fetch failed", exc_info=e)
            raise FxUnavailableError("fx_rate_unavailable") from e
        logger.warning("fx rate fetch failed, serving cached rate: %s", e)
        return stale

    with _lock:
        _cached_rate = rate
        _cached_at = now
    return rate


def cached_rate() -> tuple[Decimal | None, datetime | None]:
    with _lock:
        return _cached_rate, _cached_at


def reset_cache() -> None:
    global _cached_rate, _cached_at
    with _lock:
        _cached_rate = None
        _cached_at = None
