"""Tests for the Open-Meteo rainfall client."""

from datetime import date

import httpx
import pytest

from floodvision.data_sources.errors import DataSourceError
from floodvision.data_sources.weather_client import WeatherClient, categorize_rainfall, monthly_totals


@pytest.fixture
def client(tmp_path):
    return WeatherClient(cache_dir=str(tmp_path / "weather"))


def forecast_payload():
    return {
        "daily": {
            "time": ["2025-01-15", "2025-01-16", "2025-01-17"],
            "precipitation_sum": [12.4, None, 80.0],
            "precipitation_probability_max": [90, 20],
        }
    }


@pytest.mark.parametrize("mm,category", [
    (0, "no_rain"),
    (5, "light"),
    (20, "moderate"),
    (50, "heavy"),
    (100, "very_heavy"),
    (124.4, "extremely_heavy"),
])
def test_categorize_rainfall(mm, category):
    assert categorize_rainfall(mm) == category


def test_monthly_totals_resamples_by_calendar_month():
    totals = monthly_totals(
        ["2025-01-01", "2025-01-20", "2025-02-03", "2025-02-04"],
        [10.0, 2.5, None, 5.5],
    )
    assert [(p.date, p.rainfall_mm) for p in totals] == [("2025-01-01", 12.5), ("2025-02-01", 5.5)]


def test_monthly_totals_empty():
    assert monthly_totals([], []) == []


class TestRainfallForecast:

    def test_parses_daily_series(self, client, monkeypatch):
        calls = []

        def fake_get(url, params):
            calls.append(params)
            return forecast_payload()

        monkeypatch.setattr(client, "_get", fake_get)
        forecast = client.get_rainfall_forecast(13.08, 80.27, days=3)

        assert [p.date for p in forecast] == ["2025-01-15", "2025-01-16", "2025-01-17"]
        assert [p.rainfall_mm for p in forecast] == [12.4, 0.0, 80.0]
        assert [p.probability_percent for p in forecast] == [90.0, 20.0, 0.0]
        assert calls[0]["daily"] == "precipitation_sum,precipitation_probability_max"
        assert calls[0]["forecast_days"] == 3

    def test_caps_forecast_window(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr(client, "_get", lambda url, params: calls.append(params) or forecast_payload())
        client.get_rainfall_forecast(13.08, 80.27, days=30)
        assert calls[0]["forecast_days"] == 16

    def test_second_call_served_from_cache(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr(client, "_get", lambda url, params: calls.append(params) or forecast_payload())

        first = client.get_rainfall_forecast(13.08, 80.27, days=3)
        second = client.get_rainfall_forecast(13.08, 80.27, days=3)

        assert len(calls) == 1
        assert second == first

    def test_corrupt_cache_is_ignored(self, client, monkeypatch):
        (client.cache_dir / "forecast_13.08_80.27_3.json").write_text("{not json")
        monkeypatch.setattr(client, "_get", lambda url, params: forecast_payload())
        assert len(client.get_rainfall_forecast(13.08, 80.27, days=3)) == 3

    def test_empty_series_is_an_error(self, client, monkeypatch):
        monkeypatch.setattr(client, "_get", lambda url, params: {"daily": {}})
        with pytest.raises(DataSourceError):
            client.get_rainfall_forecast(13.08, 80.27, days=3)

    def test_http_failure_becomes_data_source_error(self, client, monkeypatch):
        real_client = httpx.Client

        def handler(request):
            return httpx.Response(503, json={"reason": "maintenance"})

        monkeypatch.setattr(
            httpx, "Client", lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)
        )
        with pytest.raises(DataSourceError) as exc:
            client.get_rainfall_forecast(13.08, 80.27, days=3)
        assert exc.value.source == "open-meteo"


class TestMonthlyHistory:

    def test_requests_trailing_full_months(self, client, monkeypatch):
        calls = []

        def fake_get(url, params):
            calls.append((url, params))
            return {
                "daily": {
                    "time": ["2025-01-01", "2025-01-02", "2025-02-01"],
                    "precipitation_sum": [10.0, None, 5.5],
                }
            }

        monkeypatch.setattr(client, "_get", fake_get)
        history = client.get_monthly_history(13.08, 80.27, months=2, today=date(2025, 3, 10))

        url, params = calls[0]
        assert url == client.archive_url
        assert params["start_date"] == "2025-01-01"
        assert params["end_date"] == "2025-02-28"
        assert [(p.date, p.rainfall_mm) for p in history] == [("2025-01-01", 10.0), ("2025-02-01", 5.5)]

    def test_default_window_is_twelve_months(self, client, monkeypatch):
        calls = []

        def fake_get(url, params):
            calls.append(params)
            return {"daily": {"time": ["2024-03-01"], "precipitation_sum": [1.0]}}

        monkeypatch.setattr(client, "_get", fake_get)
        client.get_monthly_history(13.08, 80.27, today=date(2025, 3, 10))
        assert calls[0]["start_date"] == "2024-03-01"

    def test_empty_archive_is_an_error(self, client, monkeypatch):
        monkeypatch.setattr(client, "_get", lambda url, params: {"daily": {"time": []}})
        with pytest.raises(DataSourceError):
            client.get_monthly_history(13.08, 80.27, today=date(2025, 3, 10))

    def test_rainfall_series(self, client, monkeypatch):
        def fake_get(url, params):
            if url == client.archive_url:
                return {"daily": {"time": ["2025-01-01"], "precipitation_sum": [120.0]}}
            return forecast_payload()

        monkeypatch.setattr(client, "_get", fake_get)
        series = client.get_rainfall_series(13.08, 80.27, days=3)
        assert series.average_rainfall == 120.0
        assert len(series.forecast) == 3


class TestMalformedResponses:

    @pytest.mark.parametrize("body", [
        [],
        {"daily": None},
        {"daily": {"time": ["2025-01-15"], "precipitation_sum": ["n/a"]}},
        {"daily": {"time": ["2025-01-15"], "precipitation_sum": 4.2}},
    ])
    def test_forecast_payload_errors(self, client, mock_feed, body):
        mock_feed(lambda request: httpx.Response(200, json=body))
        with pytest.raises(DataSourceError) as exc:
            client.get_rainfall_forecast(13.08, 80.27, days=3)
        assert exc.value.source == "open-meteo"

    @pytest.mark.parametrize("body", [
        "archive offline",
        {"daily": ["2025-01-01"]},
        {"daily": {"time": ["2025-01-01"], "precipitation_sum": ["n/a"]}},
        {"daily": {"time": ["not a date"], "precipitation_sum": [3.0]}},
    ])
    def test_archive_payload_errors(self, client, mock_feed, body):
        mock_feed(lambda request: httpx.Response(200, json=body))
        with pytest.raises(DataSourceError) as exc:
            client.get_monthly_history(13.08, 80.27, today=date(2025, 3, 10))
        assert exc.value.source == "open-meteo-archive"

    def test_malformed_response_is_not_cached(self, client, mock_feed):
        mock_feed(lambda request: httpx.Response(200, json={"daily": {"time": ["2025-01-15"],
                                                                      "precipitation_sum": ["n/a"]}}))
        with pytest.raises(DataSourceError):
            client.get_rainfall_forecast(13.08, 80.27, days=3)
        assert list(client.cache_dir.iterdir()) == []
