"""Region lookup helpers."""

from typing import Optional

from floodvision.utils.constants import REGION_ALIASES, REGIONS


def resolve_region(region: str) -> Optional[str]:
    """Return the canonical region key, or None if unknown."""
    if not region:
        return None
    key = region.strip().lower()
    key = REGION_ALIASES.get(key, key)
    return key if key in REGIONS else None


def get_region(region: str) -> dict:
    """Region record with its key. Raises KeyError for unknown regions."""
    key = resolve_region(region)
    if key is None:
        raise KeyError(f"Unknown region: {region}")
    return {"key": key, **REGIONS[key]}
