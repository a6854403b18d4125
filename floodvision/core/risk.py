"""Reservoir-based flood risk scoring.

Each reservoir earns points for how full it is, how fast it is filling and
whether it is about to spill. The average score across a region's reservoirs,
together with a few count-based overrides, selects one of four ordered risk
bands (low < medium < high < severe).
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable, List

from loguru import logger

from floodvision.models import RegionSummary, ReservoirObservation, RiskAssessment, coerce_number
from floodvision.core.regions import resolve_region
from floodvision.utils.constants import INDIA_CENTROID, REGION_RESERVOIRS, REGIONS, RISK_BANDS, RISK_LEVELS

NO_DATA_REASONING = "No local reservoir data available"


@dataclass
class ReservoirScore:
    """Score breakdown for a single reservoir."""
    name: str
    score: float
    critical: bool
    overflowing: bool
    high_inflow: bool


def fill_percentage(reservoir: ReservoirObservation) -> float:
    pct = coerce_number(reservoir.percentage_full)
    if not pct and reservoir.current_level_mcm and reservoir.capacity_mcm:
        pct = coerce_number(reservoir.current_level_mcm) / coerce_number(reservoir.capacity_mcm) * 100
    return max(0.0, pct)


def score_reservoir(reservoir: ReservoirObservation) -> ReservoirScore:
    """Score one reservoir by fill level, net inflow and overflow risk."""
    pct = fill_percentage(reservoir)
    net_inflow = coerce_number(reservoir.inflow_cusecs) - coerce_number(reservoir.outflow_cusecs)

    score = 0
    if pct > 90:
        score += 40
    elif pct > 80:
        score += 25
    elif pct > 70:
        score += 15

    if net_inflow > 10000:
        score += 30
    elif net_inflow > 5000:
        score += 20
    elif net_inflow > 1000:
        score += 10

    overflowing = pct > 95 and net_inflow > 0
    if overflowing:
        score += 50

    return ReservoirScore(
        name=reservoir.name,
        score=score,
        critical=pct > 90,
        overflowing=overflowing,
        high_inflow=net_inflow > 10000,
    )


def classify_risk(avg_score: float, critical: int, overflowing: int, high_inflow: int) -> str:
    """Map an average score and counters to a band. First match wins."""
    if avg_score >= 70 or overflowing > 0:
        return "severe"
    if avg_score >= 50 or critical > 1:
        return "high"
    if avg_score >= 30 or high_inflow > 0:
        return "medium"
    return "low"


def risk_rank(level: str) -> int:
    return RISK_LEVELS.index(level)


def _reasoning(count: int, critical: int, overflowing: int, high_inflow: int) -> str:
    reasoning = f"Based on {count} local reservoirs: "
    # "above 80%" is the wording shown to users for the >90% counter
    if critical:
        reasoning += f"{critical} reservoir(s) above 80% capacity. "
    if overflowing:
        reasoning += f"{overflowing} reservoir(s) near overflow. "
    if high_inflow:
        reasoning += f"{high_inflow} reservoir(s) with high inflow rates. "
    return reasoning.strip()


def calculate_flood_risk(region: str, reservoirs: Iterable[ReservoirObservation]) -> RiskAssessment:
    """Compute the reservoir-driven risk band for a region.

    An empty input yields ``medium``: missing data is not reassuring.
    """
    reservoirs = list(reservoirs)
    if not reservoirs:
        return RiskAssessment(
            risk_level="medium",
            probability_increase_percent=0,
            affected_population_estimate=0,
            reasoning=NO_DATA_REASONING,
            reservoir_count=0,
        )

    scores = [score_reservoir(r) for r in reservoirs]
    avg_score = sum(s.score for s in scores) / len(scores)
    critical = sum(1 for s in scores if s.critical)
    overflowing = sum(1 for s in scores if s.overflowing)
    high_inflow = sum(1 for s in scores if s.high_inflow)

    level = classify_risk(avg_score, critical, overflowing, high_inflow)
    band = RISK_BANDS[level]

    logger.debug(
        f"{region}: {len(scores)} reservoirs, avg score {avg_score:.1f} -> {level} "
        f"(critical={critical}, overflowing={overflowing}, high_inflow={high_inflow})"
    )

    return RiskAssessment(
        risk_level=level,
        probability_increase_percent=band["probability_increase"],
        affected_population_estimate=band["affected_population"],
        reasoning=_reasoning(len(scores), critical, overflowing, high_inflow),
        reservoir_count=len(scores),
    )


def select_region_reservoirs(region: str, reservoirs: Iterable[ReservoirObservation]) -> List[ReservoirObservation]:
    """Keep reservoirs named for the region or located in its state."""
    key = resolve_region(region)
    if key is None:
        return []

    fragments = [f.lower() for f in REGION_RESERVOIRS.get(key, [])]
    state = REGIONS[key]["state"].lower()

    selected = []
    for r in reservoirs:
        name = (r.name or "").lower()
        if any(f in name for f in fragments) or (r.state and r.state.lower() == state):
            selected.append(r)
    return selected


def assess_region(region: str, reservoirs: Iterable[ReservoirObservation]) -> RiskAssessment:
    relevant = select_region_reservoirs(region, reservoirs)
    logger.info(f"Risk for {region}: {len(relevant)} relevant reservoirs")
    return calculate_flood_risk(region, relevant)


def summarize_regions(reservoirs: Iterable[ReservoirObservation]) -> List[RegionSummary]:
    """Aggregate reservoirs per state/district and band each group."""
    groups = OrderedDict()
    for r in reservoirs:
        state = r.state or "Unknown State"
        district = r.district or "Unknown District"
        groups.setdefault((state.lower(), district.lower()), (state, district, []))[2].append(r)

    summaries = []
    for state, district, members in groups.values():
        first = members[0]
        if first.lat is not None and first.lon is not None:
            coords = (first.lat, first.lon)
        else:
            coords = INDIA_CENTROID

        summaries.append(RegionSummary(
            state=state,
            district=district,
            reservoir_percentage=max(min(100.0, fill_percentage(m)) for m in members),
            inflow_cusecs=sum(coerce_number(m.inflow_cusecs) for m in members),
            outflow_cusecs=sum(coerce_number(m.outflow_cusecs) for m in members),
            risk_level=calculate_flood_risk(district, members).risk_level,
            coordinates=coords,
            last_updated=max((m.last_updated for m in members if m.last_updated), default=""),
            reservoir_count=len(members),
        ))

    logger.info(f"Aggregated {len(summaries)} regions")
    return summaries
