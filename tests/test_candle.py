"""
Candle builder validation and input capability accessors.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from streamta.data import (
    Candle,
    HasClose,
    HasHighLowClose,
    close_of,
    close_volume_of,
    fields_of,
    high_low_close_of,
    typical_price_of,
)
from streamta.errors import DataItemIncomplete, DataItemInvalid, TaError


def build(open_, high, low, close, volume):
    return (
        Candle.builder()
        .open(open_)
        .high(high)
        .low(low)
        .close(close)
        .volume(volume)
        .build()
    )


class TestCandleBuilder:

    @pytest.mark.parametrize("record", [
        # open, high, low, close, volume
        (20, 25, 15, 21, 7500),
        (10, 10, 10, 10, 10),
        (0, 0, 0, 0, 0),
    ])
    def test_valid_records(self, record):
        candle = build(*record)
        assert candle.close == Decimal(record[3])
        assert candle.time is None

    @pytest.mark.parametrize("record", [
        (-1, 25, 15, 21, 7500),
        (20, -1, 15, 21, 7500),
        (20, 25, 15, -1, 7500),
        (20, 25, 15, 21, -1),
        (14, 25, 15, 21, 7500),
        (26, 25, 15, 21, 7500),
        (20, 25, 15, 14, 7500),
        (20, 25, 15, 26, 7500),
        (20, 15, 25, 21, 7500),
    ])
    def test_invalid_records(self, record):
        with pytest.raises(DataItemInvalid):
            build(*record)

    def test_missing_field_is_incomplete(self):
        builder = Candle.builder().open(20).high(25).low(15).close(21)
        with pytest.raises(DataItemIncomplete, match="volume"):
            builder.build()

    def test_errors_share_root(self):
        assert issubclass(DataItemIncomplete, TaError)
        assert issubclass(DataItemInvalid, TaError)

    def test_time_is_optional_and_kept(self):
        stamp = datetime(2024, 1, 2, 9, 30)
        candle = (
            Candle.builder().time(stamp)
            .open("1.5").high("2").low("1").close("1.75").volume(100)
            .build()
        )
        assert candle.time == stamp
        assert candle.open == Decimal("1.5")

    def test_float_prices_become_exact_decimals(self):
        candle = build(0.1, 0.3, 0.1, 0.2, 5)
        assert candle.close == Decimal("0.2")

    def test_non_numeric_price(self):
        with pytest.raises(ValueError):
            Candle.builder().close("n/a")

    def test_low_above_high(self):
        with pytest.raises(DataItemInvalid):
            build(20, 19, 21, 20, 10)

    def test_candle_is_immutable(self):
        candle = build(20, 25, 15, 21, 7500)
        with pytest.raises(AttributeError):
            candle.close = Decimal(1)


class CustomBar:
    """Caller-owned bar type, not a Candle."""

    def __init__(self, high, low, close):
        self.high = high
        self.low = low
        self.close = close


class CloseOnly:
    def __init__(self, close):
        self.close = close


class TestCapabilities:

    def test_candle_satisfies_protocols(self):
        candle = build(20, 25, 15, 21, 7500)
        assert isinstance(candle, HasClose)
        assert isinstance(candle, HasHighLowClose)

    def test_close_of_scalar_and_bar(self):
        assert close_of(5) == Decimal(5)
        assert close_of("10.57") == Decimal("10.57")
        assert close_of(CloseOnly(3)) == Decimal(3)

    def test_close_of_rejects_bool_and_none(self):
        with pytest.raises(TypeError):
            close_of(True)
        with pytest.raises(TypeError):
            close_of(None)

    def test_high_low_close_of_custom_type(self):
        assert high_low_close_of(CustomBar(3, 1, 2)) == (Decimal(3), Decimal(1), Decimal(2))

    def test_high_low_close_of_missing_fields(self):
        with pytest.raises(TypeError, match="high, low, close"):
            high_low_close_of(CloseOnly(3))
        with pytest.raises(TypeError):
            high_low_close_of(Decimal(3))

    def test_close_volume_of(self):
        candle = build(20, 25, 15, 21, 7500)
        assert close_volume_of(candle) == (Decimal(21), Decimal(7500))
        with pytest.raises(TypeError, match="volume"):
            close_volume_of(CustomBar(3, 1, 2))

    def test_fields_of_names_only_missing_fields(self):
        with pytest.raises(TypeError) as exc:
            fields_of(CloseOnly(3), "high", "low", "close")
        first_line = str(exc.value).splitlines()[0]
        assert first_line == "CloseOnly does not provide high, low"
        assert "attributes: high, low, close" in str(exc.value)

    def test_fields_of_open(self):
        candle = build(20, 25, 15, 21, 7500)
        assert fields_of(candle, "open", "close") == (Decimal(20), Decimal(21))

    def test_typical_price(self):
        assert typical_price_of(CustomBar("1.7", "1.2", "1.3")) == Decimal("1.4")
