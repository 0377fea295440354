from dataclasses import dataclass
from decimal import Decimal

import httpx
import pytest

import finboard.services.currency as fx
import finboard.services.prices as pr
from finboard.services.currency import FxUnavailableError, convert
from finboard.services.prices import AssetPrices, GRAMS_PER_TROY_OUNCE, revalue_assets


@pytest.fixture(autouse=True)
def _clean_caches():
    fx.reset_cache()
    pr.reset_cache()
    yield
    fx.reset_cache()
    pr.reset_cache()


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@dataclass
class _Asset:
    id: int
    type: str
    quantity: Decimal
    unit: str
    price_per_unit: Decimal
    currency: str = "USD"
    auto_update: bool = True
    date: object = None


def test_convert_same_currency_is_identity():
    assert convert(Decimal("12.5"), "USD", "USD", None) == Decimal("12.5")


def test_convert_usd_try_both_ways():
    assert convert(10, "USD", "TRY", Decimal("32.5")) == Decimal("325.0")
    assert convert(Decimal("65"), "TRY", "USD", Decimal("32.5")) == Decimal("2")


def test_convert_without_rate_raises():
    with pytest.raises(FxUnavailableError):
        convert(10, "USD", "TRY", 0)


def test_rate_is_fetched_and_cached():
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(200, json={"base": "USD", "rates": {"TRY": 32.1, "EUR": 0.9}})

    client = _client(handler)
    assert fx.get_usd_try_rate(client) == Decimal("32.1")
    assert fx.get_usd_try_rate(client) == Decimal("32.1")
    assert len(calls) == 1


def test_rate_failure_without_cache_raises():
    client = _client(lambda request: httpx.Response(500))
    with pytest.raises(FxUnavailableError):
        fx.get_usd_try_rate(client)


def test_rate_failure_serves_stale_value(monkeypatch):
    ok = _client(lambda request: httpx.Response(200, json={"rates": {"TRY": 30}}))
    assert fx.get_usd_try_rate(ok) == Decimal("30")

    monkeypatch.setattr(fx.settings, "fx_cache_seconds", 0)
    broken = _client(lambda request: httpx.Response(503))
    assert fx.get_usd_try_rate(broken) == Decimal("30")


def test_missing_try_rate_is_an_error():
    client = _client(lambda request: httpx.Response(200, json={"rates": {"EUR": 0.9}}))
    with pytest.raises(FxUnavailableError):
        fx.get_usd_try_rate(client)


def test_prices_merge_live_crypto_with_mocked_metals():
    def handler(request):
        assert request.url.params["vs_currencies"] == "usd"
        return httpx.Response(200, json={"bitcoin": {"usd": 60000}, "ethereum": {"usd": 3000.5}})

    p = pr.get_asset_prices(_client(handler))
    assert p.bitcoin == Decimal("60000")
    assert p.ethereum == Decimal("3000.5")
    assert p.cardano is None
    assert p.gold == pr.MOCK_GOLD_PRICE
    assert p.silver == pr.MOCK_SILVER_PRICE
    assert p.error is None


def test_price_failure_falls_back_to_metals_with_error():
    p = pr.get_asset_prices(_client(lambda request: httpx.Response(429)))
    assert p.bitcoin is None
    assert p.gold == pr.MOCK_GOLD_PRICE
    assert p.error


def test_revalue_auto_update_assets_only():
    prices = AssetPrices(bitcoin=Decimal("50000"))
    assets = [
        _Asset(1, "bitcoin", Decimal("0.5"), "btc", Decimal("10000")),
        _Asset(2, "bitcoin", Decimal("1"), "btc", Decimal("10000"), auto_update=False),
        _Asset(3, "real_estate", Decimal("1"), "property", Decimal("250000")),
    ]
    out = revalue_assets(assets, prices)

    assert out[0].revalued and out[0].total_value == Decimal("25000")
    assert not out[1].revalued and out[1].total_value == Decimal("10000")
    # no market price for real estate
    assert not out[2].revalued and out[2].total_value == Decimal("250000")


def test_revalue_metals_by_gram():
    prices = AssetPrices()
    out = revalue_assets([_Asset(1, "silver", Decimal("100"), "grams", Decimal("0"), currency="TRY")], prices)
    assert out[0].price_per_unit == pr.MOCK_SILVER_PRICE / GRAMS_PER_TROY_OUNCE
    assert out[0].currency == "USD"


def test_revalue_metals_by_ounce():
    out = revalue_assets([_Asset(1, "gold", Decimal("2"), "ounces", Decimal("1"))], AssetPrices())
    assert out[0].total_value == Decimal("4600")


@pytest.mark.parametrize(
    "payload",
    [
        {"rates": {"TRY": "n/a"}},
        {"rates": {"TRY": 0}},
        {"rates": ["TRY", 30]},
        [1, 2],
        "TRY=30",
    ],
)
def test_malformed_rate_payload_serves_stale_value(monkeypatch, payload):
    ok = _client(lambda request: httpx.Response(200, json={"rates": {"TRY": 30}}))
    assert fx.get_usd_try_rate(ok) == Decimal("30")

    monkeypatch.setattr(fx.settings, "fx_cache_seconds", 0)
    bad = _client(lambda request: httpx.Response(200, json=payload))
    assert fx.get_usd_try_rate(bad) == Decimal("30")


@pytest.mark.parametrize("payload", [{"rates": {"TRY": "n/a"}}, [1, 2]])
def test_malformed_rate_payload_without_cache_raises(payload):
    client = _client(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(FxUnavailableError):
        fx.get_usd_try_rate(client)
    assert fx.cached_rate() == (None, None)


@pytest.mark.parametrize(
    "payload",
    [
        {"bitcoin": 5},
        {"bitcoin": {"usd": "lots"}},
        {"ethereum": {"usd": None}, "cardano": ["usd", 1]},
        [1, 2],
    ],
)
def test_malformed_price_payload_falls_back_to_metals(payload):
    p = pr.get_asset_prices(_client(lambda request: httpx.Response(200, json=payload)))
    assert p.bitcoin is None
    assert p.gold == pr.MOCK_GOLD_PRICE
    assert p.silver == pr.MOCK_SILVER_PRICE
    assert p.error


def test_missing_coin_is_not_an_error():
    p = pr.get_asset_prices(_client(lambda request: httpx.Response(200, json={"bitcoin": {"usd": 1}})))
    assert p.bitcoin == Decimal("1")
    assert p.ethereum is None
    assert p.error is None
