"""Data sources module."""

from floodvision.data_sources.errors import DataSourceError
from floodvision.data_sources.reservoir_store import ReservoirStore, reservoir_store
from floodvision.data_sources.river_client import RiverClient
from floodvision.data_sources.weather_client import WeatherClient

__all__ = ["DataSourceError", "ReservoirStore", "reservoir_store", "RiverClient", "WeatherClient"]
