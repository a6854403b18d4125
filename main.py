"""Main entry point for Flood Vision."""

import sys
from loguru import logger

from floodvision.utils.logger import setup_logging


def main():
    """Run the application."""
    if len(sys.argv) < 2:
        print("Usage: python main.py [api|regions|risk <region>|forecast <region> [days]]")
        sys.exit(1)

    cmd = sys.argv[1]
    setup_logging()

    if cmd == "api":
        import uvicorn
        from floodvision.utils.config import settings
        logger.info("Starting API server...")
        uvicorn.run("floodvision.api.main:app", host=settings.api.host, port=settings.api.port,
                    reload=settings.api.reload)

    elif cmd == "regions":
        from floodvision.utils.constants import REGIONS
        for key, region in REGIONS.items():
            print(f"{key:<12} {region['label']:<12} {region['state']}")

    elif cmd == "risk":
        from floodvision.core import assess_region
        from floodvision.data_sources import reservoir_store
        region = _region_arg()
        assessment = assess_region(region, reservoir_store.load())
        print(f"{region.title()}: {assessment.risk_level.upper()}")
        print(assessment.reasoning)

    elif cmd == "forecast":
        from floodvision.core import ForecastParams, forecast_engine, format_output
        from floodvision.utils.config import settings
        region = _region_arg()
        try:
            days = int(sys.argv[3]) if len(sys.argv) > 3 else settings.forecast.default_days
            result = forecast_engine.fetch_flood_forecast(
                ForecastParams(region=region, days=days, include_reservoirs=True)
            )
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(format_output(result, "emergency_manager"))

    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


def _region_arg() -> str:
    if len(sys.argv) < 3:
        print("Region required, e.g. chennai")
        sys.exit(1)
    return sys.argv[2]


if __name__ == "__main__":
    main()
