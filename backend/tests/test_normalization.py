"""
Tests for the normalization layer.
"""

import pytest
from pydantic import ValidationError

from app.schemas.market import ProviderSource
from app.services.base import InvalidResponseError, ProviderError
from app.services.normalization import (
    format_epoch_millis,
    normalize,
    normalize_marketstack_series,
)


class TestPolygonNormalization:

    def test_previous_close_maps_single_letter_fields(self, polygon_prev_close):
        quote = normalize(ProviderSource.POLYGON, polygon_prev_close, "AMZN")

        assert quote.model_dump(mode="json") == {
            "symbol": "AMZN",
            "close": 185.3,
            "high": 186.0,
            "low": 184.1,
            "open": 185.0,
            "volume": 32000000,
            "date": "Tue Nov 14 2023",
            "source": "Polygon.io",
        }

    @pytest.mark.parametrize("requested", ["amzn", "Amzn", "AMZN"])
    def test_symbol_is_upper_cased(self, polygon_prev_close, requested):
        assert normalize(ProviderSource.POLYGON, polygon_prev_close, requested).symbol == "AMZN"

    @pytest.mark.parametrize("payload", [{"results": []}, {}, {"results": None}, None, []])
    def test_no_results_is_none(self, payload):
        assert normalize(ProviderSource.POLYGON, payload, "ZZZZ") is None
        assert normalize(ProviderSource.POLYGON, payload, "ZZZZ") is None

    def test_fractional_volume_becomes_int(self, polygon_prev_close):
        polygon_prev_close["results"][0]["v"] = 4.51e7
        quote = normalize(ProviderSource.POLYGON, polygon_prev_close, "AMZN")
        assert quote.volume == 45100000
        assert isinstance(quote.volume, int)

    def test_epoch_millis_formatting(self):
        assert format_epoch_millis(1700000000000) == "Tue Nov 14 2023"
        assert format_epoch_millis(1704153600000) == "Tue Jan 02 2024"


class TestMarketstackNormalization:

    def test_first_record_is_used(self, marketstack_eod):
        quote = normalize(ProviderSource.MARKETSTACK, marketstack_eod, "amzn")

        assert quote.symbol == "AMZN"
        assert quote.close == 185.31
        assert quote.high == 186.1
        assert quote.low == 184.0
        assert quote.open == 185.2
        assert quote.volume == 31500000
        assert quote.source == ProviderSource.MARKETSTACK

    def test_date_is_truncated_to_day(self, marketstack_eod):
        quote = normalize(ProviderSource.MARKETSTACK, marketstack_eod, "AMZN")
        assert quote.date == "2023-11-14"

    @pytest.mark.parametrize("payload", [{"data": []}, {"pagination": {}}, None, "oops"])
    def test_no_data_is_none(self, payload):
        assert normalize(ProviderSource.MARKETSTACK, payload, "zzzz") is None
        assert normalize(ProviderSource.MARKETSTACK, payload, "zzzz") is None

    def test_series_keeps_every_record(self, marketstack_eod):
        quotes = normalize_marketstack_series(marketstack_eod, "amzn")

        assert [q.date for q in quotes] == ["2023-11-14", "2023-11-13"]
        assert {q.symbol for q in quotes} == {"AMZN"}

    def test_series_of_empty_response(self):
        assert normalize_marketstack_series({"data": []}, "ZZZZ") == []


def test_provider_name_string_is_accepted(polygon_prev_close):
    assert normalize("Polygon.io", polygon_prev_close, "AMZN").source == ProviderSource.POLYGON


def test_normalized_quote_is_immutable(polygon_prev_close):
    quote = normalize(ProviderSource.POLYGON, polygon_prev_close, "AMZN")
    with pytest.raises(ValidationError):
        quote.close = 1.0


class TestMalformedRecords:

    def test_polygon_bar_missing_fields(self):
        with pytest.raises(InvalidResponseError) as exc_info:
            normalize(ProviderSource.POLYGON, {"results": [{"c": 1.0}]}, "AMZN")

        assert exc_info.value.provider == "Polygon.io"
        assert "Malformed Polygon.io record" in exc_info.value.message
        assert isinstance(exc_info.value, ProviderError)

    def test_marketstack_null_volume(self, marketstack_eod):
        marketstack_eod["data"][0]["volume"] = None

        with pytest.raises(InvalidResponseError):
            normalize(ProviderSource.MARKETSTACK, marketstack_eod, "AMZN")
        with pytest.raises(InvalidResponseError):
            normalize_marketstack_series(marketstack_eod, "AMZN")
