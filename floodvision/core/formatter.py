"""Output formatters for stakeholders."""

import json

from floodvision.models import FloodForecast


class EmergencyManagerFormatter:
    """Markdown bulletin for emergency managers."""

    def format(self, result: FloodForecast) -> str:
        peak = result.peak
        lines = [
            f"**FLOOD OUTLOOK: {result.region.title()}, {result.state}**",
            f"**Issued:** {result.generated_at.strftime('%Y-%m-%d %H:%M')} UTC | "
            f"**Model:** {result.model_info.version} ({result.model_info.accuracy}% accuracy)",
            "",
        ]

        if peak:
            lines.extend([
                "**PEAK:**",
                f"- {peak.date}: {peak.probability:.1f}% flood probability "
                f"(confidence {peak.confidence}%)",
                f"- Expected rainfall: {peak.expected_rainfall_mm:.1f}mm | "
                f"River rise: {peak.river_level_change_m:.2f}m",
                "",
            ])

        if result.reservoir_risk:
            risk = result.reservoir_risk
            lines.extend([
                "**RESERVOIRS:**",
                f"- Risk: {risk.risk_level.upper()} (+{risk.probability_increase_percent:g}%)",
                f"- Population at risk: {risk.affected_population_estimate:,}",
                f"- {risk.reasoning}",
                "",
            ])

        lines.append("**DAILY:**")
        for day in result.forecasts:
            lines.append(f"- {day.date}: {day.probability:.1f}% ({day.confidence}% conf.)")

        sources = result.data_sources
        lines.extend([
            "",
            "---",
            f"*Sources: history {sources.historical} | weather {sources.weather} | river {sources.river}*",
        ])

        return "\n".join(lines)


class ResearcherFormatter:
    """JSON with full details."""

    def format(self, result: FloodForecast) -> dict:
        return result.to_dict()

    def to_json(self, result: FloodForecast) -> str:
        return json.dumps(self.format(result), indent=2, default=str)


def format_output(result: FloodForecast, stakeholder: str = "emergency_manager") -> str:
    if stakeholder == "researcher":
        return ResearcherFormatter().to_json(result)
    return EmergencyManagerFormatter().format(result)
