"""Reservoir level table loaded from CSV."""

from pathlib import Path
from typing import List, Optional

import pandas as pd
from loguru import logger

from floodvision.models import ReservoirObservation
from floodvision.utils.config import get_project_root, settings

COLUMNS = [
    "reservoir_name",
    "state",
    "district",
    "current_level_mcm",
    "capacity_mcm",
    "percentage_full",
    "inflow_cusecs",
    "outflow_cusecs",
    "last_updated",
    "lat",
    "long",
]


class ReservoirStore:
    """Read-only reservoir observations, cached after first load."""

    def __init__(self, path: Optional[str] = None):
        path = Path(path or settings.reservoirs.data_path)
        self.path = path if path.is_absolute() else get_project_root() / path
        self._observations: Optional[List[ReservoirObservation]] = None

    def load(self) -> List[ReservoirObservation]:
        if self._observations is None:
            self._observations = self._read()
        return self._observations

    def reload(self) -> List[ReservoirObservation]:
        self._observations = None
        return self.load()

    def _read(self) -> List[ReservoirObservation]:
        if not self.path.exists():
            logger.warning(f"Reservoir table not found: {self.path}")
            return []

        df = pd.read_csv(self.path)
        missing = [c for c in ("reservoir_name", "state") if c not in df.columns]
        if missing:
            raise ValueError(f"{self.path.name} is missing columns: {', '.join(missing)}")

        df = df.reindex(columns=COLUMNS)
        df = df.astype(object).where(pd.notna(df), None)
        observations = [ReservoirObservation.from_record(rec) for rec in df.to_dict(orient="records")]

        logger.info(f"Loaded {len(observations)} reservoir records from {self.path.name}")
        return observations


reservoir_store = ReservoirStore()
