"""River gauge client for Central Water Commission style level feeds."""

import math
from typing import Optional

import httpx
from loguru import logger

from floodvision.data_sources.errors import DataSourceError
from floodvision.models import RiverObservation
from floodvision.utils.config import settings
from floodvision.utils.constants import RIVER_TRENDS, STATE_RIVERS


class RiverClient:
    """Fetch the latest gauge reading for a state's principal river.

    The feed is expected at ``{base_url}/rivers/level`` and to answer with
    ``riverName, currentLevel, dangerLevel, warningLevel, normalLevel, trend,
    lastUpdated``.
    """

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        self.base_url = base_url or settings.river.base_url
        self.api_key = api_key or settings.river.api_key
        self.timeout = settings.river.timeout_seconds

    def get_river_level(self, region: str, state: str) -> RiverObservation:
        if not self.base_url:
            raise DataSourceError("cwc", "river feed not configured")

        river = STATE_RIVERS.get(state, "Local River")
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        params = {"region": region, "state": state, "river": river}

        try:
            with httpx.Client(timeout=self.timeout, headers=headers) as client:
                resp = client.get(f"{self.base_url.rstrip('/')}/rivers/level", params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DataSourceError("cwc", str(e)) from e

        observation = parse_river_payload(data, default_name=river)
        logger.info(
            f"{observation.name}: {observation.current_level}m "
            f"(danger {observation.danger_level}m, {observation.trend})"
        )
        return observation


def parse_river_payload(data: dict, default_name: str = "Local River") -> RiverObservation:
    if not isinstance(data, dict):
        raise DataSourceError("cwc", f"expected a JSON object, got {type(data).__name__}")

    try:
        observation = RiverObservation(
            name=str(data.get("riverName") or default_name),
            current_level=float(data["currentLevel"]),
            danger_level=float(data["dangerLevel"]),
            warning_level=float(data["warningLevel"]),
            normal_level=float(data["normalLevel"]),
            trend=str(data.get("trend") or "stable").lower(),
            last_updated=str(data.get("lastUpdated") or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DataSourceError("cwc", f"malformed river payload: {e}") from e

    if observation.trend not in RIVER_TRENDS:
        observation.trend = "stable"
    levels = (observation.current_level, observation.danger_level, observation.warning_level, observation.normal_level)
    if not all(math.isfinite(v) for v in levels):
        raise DataSourceError("cwc", "river levels must be finite numbers")
    if observation.danger_level <= 0:
        raise DataSourceError("cwc", "danger level must be positive")
    return observation
