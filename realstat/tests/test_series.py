from __future__ import annotations

import random

import pytest

from realstat.core.series import (
    BASE_RATES,
    GDP_RATES,
    REGIONS,
    SeriesGenerator,
    UnknownSeriesError,
)


def test_repeat_calls_return_the_cached_series(generator):
    first = generator.historical()
    second = generator.historical()

    assert first is second
    assert generator.get("historical") is first
    assert generator.cached() == ["historical"]


def test_clear_cache_rolls_new_noise(generator):
    before = generator.historical()
    generator.clear_cache()

    assert generator.cached() == []
    after = generator.historical()
    assert after is not before
    assert len(after) == len(before)
    assert after != before


def test_same_seed_reproduces_series():
    assert SeriesGenerator(seed=7).historical() == SeriesGenerator(seed=7).historical()
    assert SeriesGenerator(rng=random.Random(3)).m2() == SeriesGenerator(seed=3).m2()


def test_historical_window_starts_and_stops_exactly(generator):
    points = generator.historical()

    assert points[0].date == "2000.01"
    assert points[-1].date == "2026.01"
    assert len(points) == 26 * 12 + 1
    assert all(200001 <= point.year_month <= 202601 for point in points)
    assert [p.year_month for p in points] == sorted(p.year_month for p in points)


def test_historical_values_are_positive_and_one_decimal(generator):
    for point in generator.historical():
        for value in (
            point.cpi,
            point.hpi_nation,
            point.hpi_seoul,
            point.hpi_gyeonggi,
            point.hpi_local,
            point.jeonse_nation,
            point.jeonse_seoul,
        ):
            assert value > 0
            assert round(value, 1) == value


def test_first_month_stays_near_base_index(generator):
    first = generator.historical()[0]
    # one month of drift plus noise from a base of 100
    assert 100.0 <= first.hpi_seoul <= 101.0
    assert 99.9 <= first.cpi <= 100.3


def test_custom_end_period_truncates_every_window():
    gen = SeriesGenerator(seed=5, end=(2010, 6))

    assert gen.historical()[-1].date == "2010.06"
    assert gen.interest_rate()[-1].date == "2010 Q2"
    assert gen.gdp()[-1].year == 2010
    assert gen.m2()[-1].year == 2010
    assert gen.transaction() == ()


def test_interest_rate_applies_quarter_overrides(generator):
    rates = {point.date: point.rate for point in generator.interest_rate()}

    assert len(rates) == 26 * 4 + 1
    assert rates["2000 Q1"] == BASE_RATES[2000]
    assert rates["2024 Q2"] == 3.50
    assert rates["2024 Q3"] == 3.25
    assert rates["2024 Q4"] == 3.00
    assert rates["2025 Q1"] == 3.00
    assert rates["2025 Q2"] == 2.50
    assert list(rates)[-1] == "2026 Q1"


def test_interest_rate_is_noise_free():
    assert SeriesGenerator(seed=1).interest_rate() == SeriesGenerator(seed=2).interest_rate()


def test_gdp_follows_table(generator):
    points = generator.gdp()
    assert [p.year for p in points] == list(range(2000, 2027))
    assert all(p.rate == GDP_RATES[p.year] for p in points)


def test_m2_grows_every_year(generator):
    points = generator.m2()
    assert len(points) == 27
    # minimum trend growth is 4% against 1% noise
    assert all(later.amount > earlier.amount for earlier, later in zip(points, points[1:]))
    assert points[0].growth_rate == 8.0
    assert points[-1].growth_rate == 6.0


def test_regional_snapshot_bias(generator):
    regions = {snapshot.id: snapshot for snapshot in generator.regional()}

    assert len(regions) == len(REGIONS)
    # capital region draws from [0.5, 3.5], the provinces from [-1.5, 1.5]
    assert 0.5 <= regions["seoul"].change_rate <= 3.5
    assert -1.5 <= regions["jeonnam"].change_rate <= 1.5
    for snapshot in regions.values():
        assert snapshot.current_index == snapshot.base_index
        assert 8000 <= snapshot.transaction_volume <= 38000
        assert snapshot.avg_price >= int(snapshot.base_index * 52)


def test_transaction_window_and_seasonality(generator):
    points = generator.transaction()

    assert points[0].date == "2015.01"
    assert points[-1].date == "2025.12"
    assert len(points) == 11 * 12
    january = next(p for p in points if p.year == 2016 and p.month == 1)
    april = next(p for p in points if p.year == 2016 and p.month == 4)
    assert january.volume < april.volume


def test_latest_indicators_derive_from_history(generator):
    indicators = generator.latest_indicators()
    history = generator.historical()
    latest, prev_year = history[-1], history[-13]

    assert indicators.date == "2026.01"
    assert indicators.hpi_seoul == latest.hpi_seoul
    assert indicators.interest_rate == 2.50
    expected = round((latest.hpi_seoul - prev_year.hpi_seoul) / prev_year.hpi_seoul * 100, 2)
    assert indicators.year_over_year.seoul == expected
    assert set(generator.cached()) == {"latest_indicators", "historical", "interest_rate"}


def test_unknown_series_raises(generator):
    with pytest.raises(UnknownSeriesError) as excinfo:
        generator.get("stocks")
    assert excinfo.value.name == "stocks"
    assert excinfo.value.message == "unknown series 'stocks'"
    assert str(excinfo.value) == "unknown series 'stocks'"
    with pytest.raises(KeyError):
        generator.get("")
