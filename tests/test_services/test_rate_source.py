import pytest

from fxconvert.cache import RateCache
from fxconvert.domain.exceptions import AllProvidersExhaustedError, UnknownCurrencyError
from fxconvert.services.failover import ProviderFailover
from fxconvert.services.rate_source import STATIC_USD_RATES, CachedRemoteRateSource, StaticRateSource

from .conftest import StubProvider, down


@pytest.fixture
def remote_source(clock):
    def _remote_source(*providers):
        return CachedRemoteRateSource(
            cache=RateCache(ttl_seconds=3600, clock=clock),
            failover=ProviderFailover(list(providers)),
        )
    return _remote_source


class TestCachedRemoteRateSource:

    @pytest.mark.asyncio
    async def test_miss_fetches_and_caches(self, remote_source, make_table):
        table = make_table()
        provider = StubProvider("A", table)
        source = remote_source(provider)

        first = await source.get_table("USD")
        second = await source.get_table("usd")

        assert first is table
        assert second is table
        assert provider.calls == ["USD"]

    @pytest.mark.asyncio
    async def test_refetches_after_expiry(self, remote_source, clock, make_table):
        old, new = make_table(source="old"), make_table(source="new")
        provider = StubProvider("A", old, new)
        source = remote_source(provider)

        await source.get_table("USD")
        clock.advance(3601)
        result = await source.get_table("USD")

        assert result is new
        assert len(provider.calls) == 2

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, remote_source, make_table):
        provider = StubProvider("A", down("A"), make_table())
        source = remote_source(provider)

        with pytest.raises(AllProvidersExhaustedError):
            await source.get_table("USD")

        assert len(source.cache) == 0
        assert (await source.get_table("USD")).base_currency == "USD"

    @pytest.mark.asyncio
    async def test_table_from_fallback_provider_is_cached(self, remote_source, make_table):
        a = StubProvider("A", down("A"))
        b = StubProvider("B", make_table(source="B"))
        source = remote_source(a, b)

        await source.get_table("USD")
        result = await source.get_table("USD")

        assert result.source == "B"
        assert len(b.calls) == 1

    @pytest.mark.asyncio
    async def test_status(self, remote_source, make_table):
        source = remote_source(StubProvider("A", make_table()))
        await source.get_table("USD")

        status = source.status()

        assert status["kind"] == "remote"
        assert status["cache"]["bases"] == ["USD"]
        assert status["failover"]["current_provider"] == "A"

    @pytest.mark.asyncio
    async def test_close(self, remote_source, make_table):
        provider = StubProvider("A", make_table())
        source = remote_source(provider)

        await source.close()

        assert provider.closed


class TestStaticRateSource:

    @pytest.mark.asyncio
    async def test_reference_table(self, clock):
        source = StaticRateSource(clock=clock)

        table = await source.get_table("USD")

        assert table.source == "static"
        assert table.rates["EUR"] == 0.92
        assert table.currencies() == sorted(STATIC_USD_RATES)

    @pytest.mark.asyncio
    async def test_cross_rates(self):
        source = StaticRateSource()

        table = await source.get_table("eur")

        assert table.base_currency == "EUR"
        assert table.rates["EUR"] == 1.0
        assert table.rates["USD"] == pytest.approx(1 / 0.92)
        assert table.rates["GBP"] == pytest.approx(0.79 / 0.92)

    @pytest.mark.asyncio
    async def test_unknown_base(self):
        source = StaticRateSource()

        with pytest.raises(UnknownCurrencyError) as exc_info:
            await source.get_table("ZAR")

        assert exc_info.value.code == "ZAR"

    @pytest.mark.asyncio
    async def test_custom_table(self):
        source = StaticRateSource(rates={"CHF": 0.9}, reference_currency="EUR")

        table = await source.get_table("CHF")

        assert table.rates["EUR"] == pytest.approx(1 / 0.9)

    def test_status(self):
        status = StaticRateSource().status()

        assert status["kind"] == "static"
        assert status["reference_currency"] == "USD"
        assert "MXN" in status["currencies"]
