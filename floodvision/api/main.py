"""FastAPI application."""

from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from floodvision.core import ForecastParams, assess_region, format_output, summarize_regions
from floodvision.core import forecast as forecast_module
from floodvision.core.forecast import model_info
from floodvision.core.regions import resolve_region
from floodvision.core.risk import risk_rank
from floodvision.data_sources import reservoir_store
from floodvision.utils.config import settings
from floodvision.utils.constants import REGIONS, STAKEHOLDER_TYPES

app = FastAPI(
    title="Flood Vision API",
    description="Reservoir and rainfall driven flood risk for Indian cities",
    version=settings.app.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _region_or_404(region: str) -> str:
    key = resolve_region(region)
    if key is None:
        raise HTTPException(status_code=404, detail=f"Unknown region: {region}")
    return key


@app.get("/health")
async def health():
    """Health check endpoint."""
    try:
        records = len(reservoir_store.load())
    except Exception as e:
        logger.error(f"Reservoir table unreadable: {e}")
        records = None

    return {
        "status": "healthy" if records is not None else "degraded",
        "reservoir_table": "loaded" if records is not None else "unreadable",
        "reservoir_records": records or 0,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/v1/regions")
async def list_regions():
    """Regions with a configured state and reservoir lookup."""
    return {
        "count": len(REGIONS),
        "regions": [
            {"value": key, "label": r["label"], "state": r["state"], "coordinates": list(r["coordinates"])}
            for key, r in REGIONS.items()
        ],
    }


@app.get("/api/v1/regions/summary")
async def region_summary():
    """Reservoir conditions aggregated per state and district, riskiest first."""
    summaries = summarize_regions(reservoir_store.load())
    summaries.sort(key=lambda s: (-risk_rank(s.risk_level), s.state, s.district))
    return {"count": len(summaries), "regions": [s.to_dict() for s in summaries]}


@app.get("/api/v1/risk/{region}")
async def region_risk(region: str):
    """Reservoir-driven flood risk for a region."""
    key = _region_or_404(region)
    assessment = assess_region(key, reservoir_store.load())
    return {"region": key, **assessment.to_dict()}


@app.get("/api/v1/forecasts/{region}")
def region_forecast(
    region: str,
    days: int = Query(settings.forecast.default_days, ge=1, le=settings.forecast.max_days),
    include_reservoirs: bool = Query(False),
    stakeholder: str = Query("researcher"),
):
    """Day-by-day flood probability forecast."""
    key = _region_or_404(region)
    if stakeholder not in STAKEHOLDER_TYPES:
        raise HTTPException(status_code=422, detail=f"stakeholder must be one of {STAKEHOLDER_TYPES}")

    try:
        result = forecast_module.forecast_engine.fetch_flood_forecast(
            ForecastParams(region=key, days=days, include_reservoirs=include_reservoirs)
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Forecast failed for {key}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if stakeholder == "emergency_manager":
        return {"region": key, "formatted_output": format_output(result, stakeholder)}
    return result.to_dict()


@app.get("/api/v1/models/info")
async def get_model_info():
    """Information about the forecast model."""
    return model_info().to_dict()
