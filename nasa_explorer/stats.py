"""Summary counts over upstream record lists for the dashboards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

UNKNOWN_CATEGORY = "Unknown"

FlagSpec = Union[str, Callable[[Any], Any], None]
CategorySpec = Union[str, Callable[[Any], Any], None]

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class AggregateStats:
    total: int = 0
    true_count: int = 0
    false_count: int = 0
    category_counts: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "true_count": self.true_count,
            "false_count": self.false_count,
            "category_counts": dict(self.category_counts),
        }


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _resolve(record: Any, selector: Union[str, Callable[[Any], Any]]) -> Any:
    if callable(selector):
        return selector(record)
    return _get(record, selector)


def is_truthy(value: Any) -> bool:
    """Interpret boolean-like upstream values (``"true"``, ``1``, ``True``)."""

    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _category_labels(value: Any) -> List[str]:
    if value is None or value == "":
        return [UNKNOWN_CATEGORY]
    items = value if isinstance(value, (list, tuple)) else [value]
    labels: List[str] = []
    for item in items:
        if isinstance(item, Mapping):
            label = item.get("title") or item.get("id") or item.get("name")
            labels.append(str(label) if label not in (None, "") else UNKNOWN_CATEGORY)
        elif item is None or item == "":
            labels.append(UNKNOWN_CATEGORY)
        else:
            labels.append(str(item))
    return labels


def build_aggregate_stats(
    records: Iterable[Any],
    flag_field: FlagSpec = None,
    category_field: CategorySpec = None,
) -> AggregateStats:
    """Fold ``records`` into total, flag and per-category counts in one pass.

    ``flag_field`` and ``category_field`` may each be a field name (looked up
    on mappings or as an attribute) or a callable taking the record.  A list
    valued category contributes one count per element, so category counts can
    exceed ``total`` for EONET-style multi-category events.
    """

    total = 0
    true_count = 0
    counts: Dict[str, int] = {}
    for record in records:
        total += 1
        if flag_field is not None and is_truthy(_resolve(record, flag_field)):
            true_count += 1
        if category_field is not None:
            for label in _category_labels(_resolve(record, category_field)):
                counts[label] = counts.get(label, 0) + 1
    return AggregateStats(
        total=total,
        true_count=true_count,
        false_count=total - true_count,
        category_counts=counts,
    )


# --------------------------------------------------------------------- NeoWs


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _average_diameter_km(asteroid: Mapping[str, Any]) -> float:
    km = (asteroid.get("estimated_diameter") or {}).get("kilometers") or {}
    low = _to_float(km.get("estimated_diameter_min")) or 0.0
    high = _to_float(km.get("estimated_diameter_max")) or 0.0
    return (low + high) / 2


def _first_approach(asteroid: Mapping[str, Any]) -> Mapping[str, Any]:
    approaches = asteroid.get("close_approach_data") or []
    return approaches[0] if approaches else {}


def flatten_neo_feed(near_earth_objects: Mapping[str, Sequence[Any]]) -> List[Any]:
    """Flatten the date-keyed NeoWs feed into a single list (date order)."""

    flat: List[Any] = []
    for date in sorted(near_earth_objects):
        flat.extend(near_earth_objects[date] or [])
    return flat


def average_size_km(asteroids: Sequence[Mapping[str, Any]]) -> float:
    if not asteroids:
        return 0.0
    return round(sum(_average_diameter_km(a) for a in asteroids) / len(asteroids), 3)


def closest_approach_km(asteroids: Sequence[Mapping[str, Any]]) -> Optional[float]:
    distances = []
    for asteroid in asteroids:
        miss = _first_approach(asteroid).get("miss_distance") or {}
        value = _to_float(miss.get("kilometers"))
        if value is not None:
            distances.append(value)
    return round(min(distances)) if distances else None


def size_distribution(asteroids: Sequence[Mapping[str, Any]]) -> Dict[str, int]:
    ranges = {"tiny": 0, "small": 0, "medium": 0, "large": 0, "giant": 0}
    for asteroid in asteroids:
        size = _average_diameter_km(asteroid)
        if size < 0.01:
            ranges["tiny"] += 1
        elif size < 0.1:
            ranges["small"] += 1
        elif size < 1:
            ranges["medium"] += 1
        elif size < 10:
            ranges["large"] += 1
        else:
            ranges["giant"] += 1
    return ranges


def velocity_stats(asteroids: Sequence[Mapping[str, Any]]) -> Optional[Dict[str, float]]:
    velocities = []
    for asteroid in asteroids:
        relative = _first_approach(asteroid).get("relative_velocity") or {}
        value = _to_float(relative.get("kilometers_per_second"))
        if value is not None and value > 0:
            velocities.append(value)
    if not velocities:
        return None
    return {
        "min": round(min(velocities), 2),
        "max": round(max(velocities), 2),
        "average": round(sum(velocities) / len(velocities), 2),
    }


def risk_assessment(asteroids: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    hazardous = [a for a in asteroids if is_truthy(a.get("is_potentially_hazardous_asteroid"))]
    if len(hazardous) > 5:
        level = "HIGH"
    elif len(hazardous) > 2:
        level = "MEDIUM"
    else:
        level = "LOW"
    percentage = round(len(hazardous) / len(asteroids) * 100, 1) if asteroids else 0.0
    largest = max(hazardous, key=_average_diameter_km) if hazardous else None
    return {
        "risk_level": level,
        "hazardous_percentage": percentage,
        "largest_hazardous": average_size_km([largest]) if largest else None,
    }


def orbital_characteristics(asteroids: Sequence[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    orbital = [a.get("orbital_data") for a in asteroids if a.get("orbital_data")]
    if not orbital:
        return None
    periods = [_to_float(o.get("orbital_period")) or 0.0 for o in orbital]
    eccentricities = [_to_float(o.get("eccentricity")) for o in orbital]
    known = [e for e in eccentricities if e is not None]
    return {
        "average_orbital_period": round(sum(periods) / len(periods), 2),
        "eccentricity_range": {
            "min": round(min(known), 3) if known else None,
            "max": round(max(known), 3) if known else None,
        },
    }


def daily_breakdown(near_earth_objects: Mapping[str, Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    rows = []
    for date in sorted(near_earth_objects):
        day = list(near_earth_objects[date] or [])
        counts = build_aggregate_stats(day, flag_field="is_potentially_hazardous_asteroid")
        rows.append(
            {
                "date": date,
                "total_count": counts.total,
                "hazardous_count": counts.true_count,
                "safe_count": counts.false_count,
                "average_size": average_size_km(day),
            }
        )
    return rows


def analyze_neo_feed(feed: Mapping[str, Any], analysis_type: str = "basic") -> Dict[str, Any]:
    """Summarise a NeoWs ``/feed`` response; ``"detailed"`` adds per-day and risk data."""

    near_earth_objects = feed.get("near_earth_objects") or {}
    asteroids = flatten_neo_feed(near_earth_objects)
    counts = build_aggregate_stats(asteroids, flag_field="is_potentially_hazardous_asteroid")
    result: Dict[str, Any] = {
        "total_count": counts.total,
        "potentially_hazardous_count": counts.true_count,
        "safe_count": counts.false_count,
        "average_size_km": average_size_km(asteroids),
        "closest_approach_km": closest_approach_km(asteroids),
        "size_distribution": size_distribution(asteroids),
        "velocity_stats": velocity_stats(asteroids),
    }
    if analysis_type == "detailed":
        result["daily_breakdown"] = daily_breakdown(near_earth_objects)
        result["risk_assessment"] = risk_assessment(asteroids)
        result["orbital_characteristics"] = orbital_characteristics(asteroids)
    return result


# ----------------------------------------------------------------- EONET/OSDR


def _source_ids(event: Mapping[str, Any]) -> List[str]:
    return [str(s.get("id") or UNKNOWN_CATEGORY) for s in event.get("sources") or []]


def summarize_eonet_events(events: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Active/closed totals plus per-category and per-source counts."""

    by_category = build_aggregate_stats(
        events,
        flag_field=lambda event: event.get("closed") is None,
        category_field=lambda event: event.get("categories") or [],
    )
    by_source = build_aggregate_stats(events, category_field=_source_ids)
    return {
        "total_events": by_category.total,
        "active_events": by_category.true_count,
        "closed_events": by_category.false_count,
        "categories_count": dict(by_category.category_counts),
        "sources_count": dict(by_source.category_counts),
    }


def summarize_osdr_studies(studies: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    counts = build_aggregate_stats(
        studies,
        flag_field=lambda study: str(study.get("status") or "").lower() == "active",
        category_field="status",
    )
    return {
        "total_studies": counts.total,
        "active_studies": counts.true_count,
        "inactive_studies": counts.false_count,
        "status_count": dict(counts.category_counts),
    }


__all__ = [
    "AggregateStats",
    "UNKNOWN_CATEGORY",
    "analyze_neo_feed",
    "average_size_km",
    "build_aggregate_stats",
    "closest_approach_km",
    "daily_breakdown",
    "flatten_neo_feed",
    "is_truthy",
    "orbital_characteristics",
    "risk_assessment",
    "size_distribution",
    "summarize_eonet_events",
    "summarize_osdr_studies",
    "velocity_stats",
]
