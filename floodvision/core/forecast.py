"""Multi-day flood probability forecast."""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from floodvision.core.regions import get_region
from floodvision.core.risk import assess_region
from floodvision.data_sources import DataSourceError, RiverClient, WeatherClient, reservoir_store
from floodvision.models import (
    DataSourceInfo,
    FloodForecast,
    ForecastDay,
    ForecastFactors,
    ModelInfo,
    RainfallPoint,
    RiverObservation,
)
from floodvision.utils.config import settings
from floodvision.utils.constants import SEASONAL_COEFFICIENTS

# sin(day * 0.5) wave and uniform noise centred on zero
WAVE_AMPLITUDE = 5.0
JITTER_AMPLITUDE = 5.0

TERRAIN_FACTOR = 10.0
MIN_PROBABILITY = 5.0
MAX_PROBABILITY = 95.0


def seasonal_coefficient(day: date) -> float:
    return SEASONAL_COEFFICIENTS[day.month - 1]


def average_rainfall(historical: Sequence[RainfallPoint]) -> float:
    """Mean of the historical series; 0 when there is no history."""
    if not historical:
        return 0.0
    return sum(p.rainfall_mm for p in historical) / len(historical)


def river_factor(river: Optional[RiverObservation]) -> float:
    if river is None or river.danger_level <= 0:
        return 0.0
    factor = (river.current_level / river.danger_level) * 30
    if river.trend == "rising":
        factor *= 1.2
    return factor


def generate_forecast(
    region: str,
    day: date,
    rainfall_mm: float,
    historical: Sequence[RainfallPoint],
    river: Optional[RiverObservation] = None,
    day_index: int = 0,
    rng=None,
) -> ForecastDay:
    """Flood probability for one day of the forecast window.

    ``rng`` is anything with a ``random()`` method returning a float in
    [0, 1); pass a seeded ``numpy.random.Generator`` for reproducible output.
    """
    rng = rng if rng is not None else np.random.default_rng()

    coefficient = seasonal_coefficient(day)
    avg = average_rainfall(historical)

    rainfall_mm = rainfall_mm if rainfall_mm is not None and math.isfinite(rainfall_mm) else 0.0
    base_rainfall = (rainfall_mm / (avg * 1.5)) * 100 if avg > 0 else 0.0
    river_level = river_factor(river)
    ground_saturation = base_rainfall * 0.3
    historical_pattern = 15.0 if avg > 200 else 5.0

    probability = (
        base_rainfall * 0.4
        + river_level * 0.3
        + ground_saturation
        + historical_pattern
        + TERRAIN_FACTOR
    )
    probability *= coefficient

    variability = 1 + day_index * 0.05
    jitter = math.sin(day_index * 0.5) * WAVE_AMPLITUDE + (rng.random() * JITTER_AMPLITUDE - JITTER_AMPLITUDE / 2)
    probability = probability * variability + jitter
    probability = min(MAX_PROBABILITY, max(MIN_PROBABILITY, probability))

    confidence = max(0, math.floor(95 - day_index * 5))

    logger.debug(f"{region} {day}: p={probability:.1f} (base {base_rainfall:.1f}, season {coefficient})")

    return ForecastDay(
        date=day.strftime("%Y-%m-%d"),
        probability=round(probability, 1),
        confidence=confidence,
        expected_rainfall_mm=round((probability / 100) * avg * 1.5, 1),
        river_level_change_m=round((probability / 100) * 2, 2),
        factors=ForecastFactors(
            rainfall=round(base_rainfall, 1),
            river_level=round(river_level, 1) if river is not None else None,
            ground_saturation=round(ground_saturation, 1),
            historical_pattern=historical_pattern,
            terrain=TERRAIN_FACTOR,
        ),
    )


@dataclass
class ForecastParams:
    region: str
    state: Optional[str] = None
    days: int = settings.forecast.default_days
    coordinates: Optional[Tuple[float, float]] = None
    include_reservoirs: bool = False


class ForecastEngine:
    """Collects rainfall and river inputs and builds the day-by-day forecast."""

    def __init__(self, weather=None, rivers=None, reservoirs=None, rng=None):
        self.weather = weather or WeatherClient()
        self.rivers = rivers or RiverClient()
        self.reservoirs = reservoirs or reservoir_store
        self.rng = rng if rng is not None else np.random.default_rng(settings.forecast.seed)

    def fetch_flood_forecast(self, params: ForecastParams, today: Optional[date] = None) -> FloodForecast:
        if not 1 <= params.days <= settings.forecast.max_days:
            raise ValueError(f"days must be between 1 and {settings.forecast.max_days}")

        region = get_region(params.region)
        state = params.state or region["state"]
        lat, lon = params.coordinates or region["coordinates"]
        today = today or date.today()

        logger.info(f"Forecast {region['key']}: {params.days} days from {today}")

        historical = self._historical(lat, lon)
        live, river = self._live_inputs(region["key"], state, lat, lon, params.days)

        avg = average_rainfall(historical)
        monthly = _monthly_normals(historical)
        live_by_date = {p.date: p.rainfall_mm for p in live}

        forecasts = []
        for i in range(params.days):
            day = today + timedelta(days=i)
            key = day.strftime("%Y-%m-%d")
            if key in live_by_date:
                rainfall = live_by_date[key] * settings.forecast.monthly_equivalent_days
            else:
                rainfall = monthly.get(day.month, avg)
            forecasts.append(generate_forecast(region["key"], day, rainfall, historical, river, i, self.rng))

        reservoir_risk = None
        if params.include_reservoirs:
            reservoir_risk = assess_region(region["key"], self.reservoirs.load())

        data_sources = DataSourceInfo(
            historical=f"Open-Meteo archive ({len(historical)} months)" if historical else "unavailable",
            weather="Open-Meteo forecast" if live else "historical only",
            river=f"CWC gauge: {river.name}" if river else "unavailable",
            live_data=bool(live) or river is not None,
        )

        logger.info(
            f"Forecast done: {len(forecasts)} days, peak "
            f"{max(d.probability for d in forecasts):.1f}%, live={data_sources.live_data}"
        )

        return FloodForecast(
            region=region["key"],
            state=state,
            generated_at=datetime.now(timezone.utc),
            forecasts=forecasts,
            model_info=model_info(),
            data_sources=data_sources,
            reservoir_risk=reservoir_risk,
        )

    def _historical(self, lat: float, lon: float) -> list:
        try:
            return self.weather.get_monthly_history(lat, lon)
        except DataSourceError as e:
            logger.warning(f"History skipped: {e}")
        except Exception as e:
            logger.exception(f"History fetch crashed, continuing without it: {e}")
        return []

    def _live_inputs(self, region: str, state: str, lat: float, lon: float, days: int) -> tuple:
        """Fetch the rainfall forecast and river gauge side by side.

        Either may fail without affecting the other.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            weather_job = pool.submit(self.weather.get_rainfall_forecast, lat, lon, days)
            river_job = pool.submit(self.rivers.get_river_level, region, state)

            live = _settle(weather_job, [], "Live rainfall")
            river = _settle(river_job, None, "River level")

        return live, river


def _settle(job, fallback, label: str):
    """Result of a fetch job, or ``fallback`` when the source failed."""
    try:
        return job.result()
    except DataSourceError as e:
        logger.warning(f"{label} skipped: {e}")
    except Exception as e:
        logger.exception(f"{label} fetch crashed, continuing without it: {e}")
    return fallback


def _monthly_normals(historical: Sequence[RainfallPoint]) -> dict:
    """Mean rainfall per calendar month of the historical series."""
    buckets = {}
    for p in historical:
        month = datetime.strptime(p.date[:10], "%Y-%m-%d").month
        buckets.setdefault(month, []).append(p.rainfall_mm)
    return {m: sum(v) / len(v) for m, v in buckets.items()}


def model_info() -> ModelInfo:
    return ModelInfo(
        version=settings.forecast.model_version,
        accuracy=settings.forecast.accuracy,
    )


forecast_engine = ForecastEngine()
