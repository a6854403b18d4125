"""Core module."""
from floodvision.core.forecast import ForecastEngine, ForecastParams, forecast_engine, generate_forecast
from floodvision.core.formatter import format_output
from floodvision.core.risk import assess_region, calculate_flood_risk, summarize_regions
