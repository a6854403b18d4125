"""Rainfall data client using Open-Meteo API."""

import json
from dataclasses import asdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import httpx
import pandas as pd
from loguru import logger

from floodvision.data_sources.errors import DataSourceError
from floodvision.models import ForecastRainfallPoint, RainfallPoint, RainfallSeries
from floodvision.utils.config import get_project_root, settings
from floodvision.utils.constants import RAINFALL_CATEGORIES


def categorize_rainfall(mm: float) -> str:
    """Categorize daily rainfall per IMD standards."""
    for upper, category in RAINFALL_CATEGORIES:
        if mm < upper:
            return category
    return "extremely_heavy"


class WeatherClient:
    """Client for precipitation data via Open-Meteo (free, no API key)."""

    def __init__(self, cache_dir: Optional[str] = None):
        self.base_url = settings.weather.forecast_url
        self.archive_url = settings.weather.archive_url
        self.timeout = settings.weather.timeout_seconds
        cache_dir = Path(cache_dir or settings.weather.cache_dir)
        self.cache_dir = cache_dir if cache_dir.is_absolute() else get_project_root() / cache_dir
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _cache_path(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def _read_cache(self, key: str, ttl_hours: int = 1) -> Optional[list]:
        path = self._cache_path(key)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
            cached_at = datetime.fromisoformat(data["cached_at"])
            if datetime.now(timezone.utc) - cached_at < timedelta(hours=ttl_hours):
                return data["data"]
        except (OSError, ValueError, KeyError) as e:
            logger.debug(f"Ignoring unreadable cache {path.name}: {e}")
        return None

    def _write_cache(self, key: str, data: list):
        path = self._cache_path(key)
        with open(path, "w") as f:
            json.dump({"cached_at": datetime.now(timezone.utc).isoformat(), "data": data}, f)

    def _get(self, url: str, params: dict) -> dict:
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(url, params=params)
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DataSourceError("open-meteo", str(e)) from e

    def get_rainfall_forecast(self, lat: float, lon: float, days: int = 7) -> List[ForecastRainfallPoint]:
        """Daily precipitation forecast, at most 16 days."""
        cache_key = f"forecast_{lat}_{lon}_{days}"

        cached = self._read_cache(cache_key, settings.weather.cache_ttl_hours)
        if cached:
            return [ForecastRainfallPoint(**p) for p in cached]

        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": "precipitation_sum,precipitation_probability_max",
            "timezone": settings.weather.timezone,
            "forecast_days": max(1, min(days, 16)),
        }
        data = self._get(self.base_url, params)

        daily = _daily_block(data, "open-meteo")
        times = daily.get("time") or []
        if not times:
            raise DataSourceError("open-meteo", "forecast response has no daily series")

        precip = daily.get("precipitation_sum") or []
        probs = daily.get("precipitation_probability_max") or []
        try:
            forecast = [
                ForecastRainfallPoint(
                    date=str(t),
                    rainfall_mm=float(precip[i] or 0) if i < len(precip) else 0.0,
                    probability_percent=float(probs[i] or 0) if i < len(probs) else 0.0,
                )
                for i, t in enumerate(times)
            ]
        except (TypeError, ValueError) as e:
            raise DataSourceError("open-meteo", f"malformed forecast series: {e}") from e

        self._write_cache(cache_key, [asdict(p) for p in forecast])
        max_precip = max(p.rainfall_mm for p in forecast)
        logger.info(f"Forecast max: {max_precip:.1f}mm ({categorize_rainfall(max_precip)})")
        return forecast

    def get_monthly_history(self, lat: float, lon: float, months: Optional[int] = None,
                            today: Optional[date] = None) -> List[RainfallPoint]:
        """Monthly rainfall totals over the trailing full months."""
        months = months or settings.weather.history_months
        today = today or date.today()
        end = today.replace(day=1) - timedelta(days=1)
        start = (pd.Timestamp(end.replace(day=1)) - pd.DateOffset(months=months - 1)).date()
        cache_key = f"history_{lat}_{lon}_{start}_{end}"

        cached = self._read_cache(cache_key, settings.weather.history_cache_ttl_hours)
        if cached:
            return [RainfallPoint(**p) for p in cached]

        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": start.strftime("%Y-%m-%d"),
            "end_date": end.strftime("%Y-%m-%d"),
            "daily": "precipitation_sum",
            "timezone": settings.weather.timezone,
        }
        data = self._get(self.archive_url, params)

        daily = _daily_block(data, "open-meteo-archive")
        try:
            history = monthly_totals(daily.get("time") or [], daily.get("precipitation_sum") or [])
        except (TypeError, ValueError) as e:
            raise DataSourceError("open-meteo-archive", f"malformed archive series: {e}") from e
        if not history:
            raise DataSourceError("open-meteo-archive", "archive response has no daily series")

        self._write_cache(cache_key, [asdict(p) for p in history])
        logger.info(f"History: {len(history)} months, {sum(p.rainfall_mm for p in history):.0f}mm total")
        return history

    def get_rainfall_series(self, lat: float, lon: float, days: int = 7) -> RainfallSeries:
        return RainfallSeries(
            historical=self.get_monthly_history(lat, lon),
            forecast=self.get_rainfall_forecast(lat, lon, days),
        )


def _daily_block(data, source: str) -> dict:
    daily = data.get("daily") if isinstance(data, dict) else None
    if not isinstance(daily, dict):
        raise DataSourceError(source, "response has no daily block")
    return daily


def monthly_totals(times: list, precip: list) -> List[RainfallPoint]:
    """Resample a daily precipitation series to calendar-month totals."""
    if not times:
        return []
    series = pd.Series(precip[: len(times)], index=pd.to_datetime(times[: len(precip)]), dtype="float64")
    totals = series.fillna(0).resample("MS").sum()
    return [
        RainfallPoint(date=ts.strftime("%Y-%m-%d"), rainfall_mm=round(float(v), 1))
        for ts, v in totals.items()
    ]
