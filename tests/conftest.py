"""
Pytest configuration and fixtures for Flood Vision tests.
"""

from datetime import date

import httpx
import pytest

from floodvision.core.forecast import ForecastEngine
from floodvision.data_sources.errors import DataSourceError
from floodvision.models import ForecastRainfallPoint, RainfallPoint, ReservoirObservation, RiverObservation


class FixedRandom:
    """Stand-in generator whose random() always returns the same value."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


class FakeWeather:
    def __init__(self, history=None, forecast=None, fail_history=False, fail_forecast=False):
        self.history = history if history is not None else []
        self.forecast = forecast if forecast is not None else []
        self.fail_history = fail_history
        self.fail_forecast = fail_forecast
        self.forecast_calls = []

    def get_monthly_history(self, lat, lon):
        if self.fail_history:
            raise DataSourceError("open-meteo-archive", "archive down")
        return self.history

    def get_rainfall_forecast(self, lat, lon, days):
        self.forecast_calls.append((lat, lon, days))
        if self.fail_forecast:
            raise DataSourceError("open-meteo", "forecast down")
        return self.forecast


class FakeRivers:
    def __init__(self, observation=None, fail=False):
        self.observation = observation
        self.fail = fail

    def get_river_level(self, region, state):
        if self.fail or self.observation is None:
            raise DataSourceError("cwc", "river feed not configured")
        return self.observation


class FakeStore:
    def __init__(self, observations=None):
        self.observations = observations or []

    def load(self):
        return self.observations


@pytest.fixture
def fixed_random():
    return FixedRandom(0.5)


@pytest.fixture
def monthly_history():
    """Twelve months of 100mm."""
    return [RainfallPoint(date=f"2024-{m:02d}-01", rainfall_mm=100.0) for m in range(1, 13)]


@pytest.fixture
def forecast_day():
    """A mid-January day (seasonal coefficient 1.2)."""
    return date(2025, 1, 15)


@pytest.fixture
def rising_river():
    return RiverObservation(
        name="Cauvery",
        current_level=6.0,
        danger_level=7.5,
        warning_level=6.0,
        normal_level=3.5,
        trend="rising",
    )


@pytest.fixture
def chennai_reservoirs():
    return [
        ReservoirObservation(name="Poondi", state="Tamil Nadu", district="Tiruvallur",
                             percentage_full=83.5, inflow_cusecs=1850, outflow_cusecs=400),
        ReservoirObservation(name="Chembarambakkam", state="Tamil Nadu", district="Kancheepuram",
                             percentage_full=97.0, inflow_cusecs=2400, outflow_cusecs=1500),
        ReservoirObservation(name="Idukki", state="Kerala", district="Idukki",
                             percentage_full=93.6, inflow_cusecs=15200, outflow_cusecs=3000),
    ]


@pytest.fixture
def live_forecast():
    return [
        ForecastRainfallPoint(date="2025-01-15", rainfall_mm=5.0, probability_percent=80),
        ForecastRainfallPoint(date="2025-01-16", rainfall_mm=0.0, probability_percent=10),
    ]


@pytest.fixture
def make_engine(monthly_history):
    def _make(weather=None, rivers=None, reservoirs=None, rng=None):
        return ForecastEngine(
            weather=weather or FakeWeather(history=monthly_history),
            rivers=rivers or FakeRivers(fail=True),
            reservoirs=reservoirs or FakeStore(),
            rng=rng or FixedRandom(0.5),
        )
    return _make


@pytest.fixture
def mock_feed(monkeypatch):
    """Route httpx.Client through a handler and record the requests."""
    real_client = httpx.Client
    requests = []

    def install(handler):
        def recording(request):
            requests.append(request)
            return handler(request)

        monkeypatch.setattr(
            httpx, "Client", lambda **kwargs: real_client(transport=httpx.MockTransport(recording), **kwargs)
        )
        return requests

    return install
