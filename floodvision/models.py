"""Data models for flood risk scoring and forecasts."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


def coerce_number(value: Any) -> float:
    """Coerce a raw numeric field to float, treating missing/NaN as 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _optional_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


@dataclass
class ReservoirObservation:
    """Reservoir storage and flow reading."""
    name: str
    percentage_full: float = 0.0
    inflow_cusecs: float = 0.0
    outflow_cusecs: float = 0.0
    current_level_mcm: Optional[float] = None
    capacity_mcm: Optional[float] = None
    last_updated: str = ""
    state: str = ""
    district: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None

    @classmethod
    def from_record(cls, record: dict) -> "ReservoirObservation":
        """Build from a raw reservoir-table row (CSV column names)."""
        level = _optional_number(record.get("current_level_mcm"))
        capacity = _optional_number(record.get("capacity_mcm"))

        pct = _optional_number(record.get("percentage_full"))
        if not pct and level is not None and capacity:
            pct = level / capacity * 100

        return cls(
            name=str(record.get("reservoir_name") or record.get("name") or "").strip(),
            percentage_full=min(100.0, max(0.0, coerce_number(pct))),
            inflow_cusecs=max(0.0, coerce_number(record.get("inflow_cusecs"))),
            outflow_cusecs=max(0.0, coerce_number(record.get("outflow_cusecs"))),
            current_level_mcm=level,
            capacity_mcm=capacity,
            last_updated=str(record.get("last_updated") or datetime.now(timezone.utc).isoformat()),
            state=str(record.get("state") or "").strip(),
            district=str(record.get("district") or "").strip(),
            lat=_optional_number(record.get("lat")),
            lon=_optional_number(record.get("long", record.get("lon"))),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "state": self.state,
            "district": self.district,
            "percentage_full": self.percentage_full,
            "inflow_cusecs": self.inflow_cusecs,
            "outflow_cusecs": self.outflow_cusecs,
            "current_level_mcm": self.current_level_mcm,
            "capacity_mcm": self.capacity_mcm,
            "last_updated": self.last_updated,
            "lat": self.lat,
            "lon": self.lon,
        }


@dataclass
class RainfallPoint:
    date: str
    rainfall_mm: float


@dataclass
class ForecastRainfallPoint:
    date: str
    rainfall_mm: float
    probability_percent: float = 0.0


@dataclass
class RainfallSeries:
    """Historical and forecast rainfall for one location, ordered by date."""
    historical: list = field(default_factory=list)
    forecast: list = field(default_factory=list)

    @property
    def average_rainfall(self) -> float:
        if not self.historical:
            return 0.0
        return sum(p.rainfall_mm for p in self.historical) / len(self.historical)


@dataclass
class RiverObservation:
    """River gauge reading."""
    name: str
    current_level: float
    danger_level: float
    warning_level: float
    normal_level: float
    trend: str = "stable"
    last_updated: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "current_level": self.current_level,
            "danger_level": self.danger_level,
            "warning_level": self.warning_level,
            "normal_level": self.normal_level,
            "trend": self.trend,
            "last_updated": self.last_updated,
        }


@dataclass
class RiskAssessment:
    """Reservoir-driven flood risk for a region."""
    risk_level: str
    probability_increase_percent: float
    affected_population_estimate: int
    reasoning: str
    reservoir_count: int = 0

    def to_dict(self) -> dict:
        return {
            "risk_level": self.risk_level,
            "probability_increase_percent": self.probability_increase_percent,
            "affected_population_estimate": self.affected_population_estimate,
            "reasoning": self.reasoning,
            "reservoir_count": self.reservoir_count,
        }


@dataclass
class ForecastFactors:
    rainfall: float
    ground_saturation: float
    historical_pattern: float
    terrain: float
    river_level: Optional[float] = None

    def to_dict(self) -> dict:
        factors = {
            "rainfall": self.rainfall,
            "ground_saturation": self.ground_saturation,
            "historical_pattern": self.historical_pattern,
            "terrain": self.terrain,
        }
        if self.river_level is not None:
            factors["river_level"] = self.river_level
        return factors


@dataclass
class ForecastDay:
    """One day of the probability-of-flood series."""
    date: str
    probability: float
    confidence: int
    expected_rainfall_mm: float
    river_level_change_m: float
    factors: ForecastFactors

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "probability": self.probability,
            "confidence": self.confidence,
            "expected_rainfall_mm": self.expected_rainfall_mm,
            "river_level_change_m": self.river_level_change_m,
            "factors": self.factors.to_dict(),
        }


@dataclass
class ModelInfo:
    version: str
    accuracy: int
    source: str = "Flood Vision heuristic model"
    last_trained: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "accuracy": self.accuracy,
            "source": self.source,
            "last_trained": self.last_trained,
        }


@dataclass
class DataSourceInfo:
    historical: str
    weather: str
    river: str
    live_data: bool = False

    def to_dict(self) -> dict:
        return {
            "historical": self.historical,
            "weather": self.weather,
            "river": self.river,
            "live_data": self.live_data,
        }


@dataclass
class FloodForecast:
    """Complete multi-day forecast output."""
    region: str
    state: str
    generated_at: datetime
    forecasts: list
    model_info: ModelInfo
    data_sources: DataSourceInfo
    reservoir_risk: Optional[RiskAssessment] = None

    @property
    def peak(self) -> Optional[ForecastDay]:
        return max(self.forecasts, key=lambda d: d.probability) if self.forecasts else None

    def to_dict(self) -> dict:
        return {
            "region": self.region,
            "state": self.state,
            "generated_at": self.generated_at.isoformat(),
            "forecasts": [d.to_dict() for d in self.forecasts],
            "model_info": self.model_info.to_dict(),
            "data_sources": self.data_sources.to_dict(),
            "reservoir_risk": self.reservoir_risk.to_dict() if self.reservoir_risk else None,
        }


@dataclass
class RegionSummary:
    """Reservoir conditions aggregated per state/district."""
    state: str
    district: str
    reservoir_percentage: float
    inflow_cusecs: float
    outflow_cusecs: float
    risk_level: str
    coordinates: tuple
    last_updated: str
    reservoir_count: int = 0

    def to_dict(self) -> dict:
        return {
            "state": self.state,
            "district": self.district,
            "reservoir_percentage": self.reservoir_percentage,
            "inflow_cusecs": self.inflow_cusecs,
            "outflow_cusecs": self.outflow_cusecs,
            "risk_level": self.risk_level,
            "coordinates": list(self.coordinates),
            "last_updated": self.last_updated,
            "reservoir_count": self.reservoir_count,
        }
