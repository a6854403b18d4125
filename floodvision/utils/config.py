"""Configuration loader for Flood Vision."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class WeatherConfig(BaseModel):
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    archive_url: str = "https://archive-api.open-meteo.com/v1/archive"
    timezone: str = "Asia/Kolkata"
    cache_dir: str = "data/cache/weather"
    cache_ttl_hours: int = 1
    history_cache_ttl_hours: int = 24
    history_months: int = 12
    timeout_seconds: int = 30


class RiverConfig(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: int = 15


class ReservoirConfig(BaseModel):
    data_path: str = "data/reservoirs.csv"


class ForecastConfig(BaseModel):
    default_days: int = 10
    max_days: int = 30
    model_version: str = "forecast-algorithm-v1.0"
    accuracy: int = 87
    seed: Optional[int] = None
    monthly_equivalent_days: int = 30


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    cors_origins: list[str] = ["*"]


class LoggingConfig(BaseModel):
    level: str = "DEBUG"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    rotation: str = "10 MB"
    retention: str = "7 days"


class AppConfig(BaseModel):
    name: str = "floodvision"
    version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True


class Settings(BaseModel):
    app: AppConfig = AppConfig()
    logging: LoggingConfig = LoggingConfig()
    weather: WeatherConfig = WeatherConfig()
    river: RiverConfig = RiverConfig()
    reservoirs: ReservoirConfig = ReservoirConfig()
    forecast: ForecastConfig = ForecastConfig()
    api: APIConfig = APIConfig()


def get_project_root() -> Path:
    return Path(__file__).parent.parent.parent


def load_yaml_config(env: str = "development") -> dict[str, Any]:
    config_path = get_project_root() / "config" / "environments" / f"{env}.yaml"
    if not config_path.exists():
        return {}
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_settings(env: Optional[str] = None) -> Settings:
    env = env or os.getenv("APP_ENV", "development")
    yaml_config = load_yaml_config(env)

    # Override with env vars
    if os.getenv("RIVER_API_URL"):
        yaml_config.setdefault("river", {})["base_url"] = os.getenv("RIVER_API_URL")
    if os.getenv("RIVER_API_KEY"):
        yaml_config.setdefault("river", {})["api_key"] = os.getenv("RIVER_API_KEY")
    if os.getenv("RESERVOIR_DATA_PATH"):
        yaml_config.setdefault("reservoirs", {})["data_path"] = os.getenv("RESERVOIR_DATA_PATH")
    if os.getenv("FLOODVISION_SEED"):
        yaml_config.setdefault("forecast", {})["seed"] = int(os.getenv("FLOODVISION_SEED"))

    return Settings(**yaml_config) if yaml_config else Settings()


settings = get_settings()
