"""Filtering, ordering and summary statistics over recommendations."""

from typing import Any, Dict, Iterable, List, Optional

from ..models.data_models import Priority, Recommendation, RecommendationSummary


def filter_by_priority(
    recommendations: Iterable[Recommendation],
    floor: Optional[str]
) -> List[Recommendation]:
    """Keep recommendations at or above ``floor`` (``low|medium|high``).
    
    An empty or unrecognised floor leaves the list untouched.
    """
    minimum = Priority.parse(floor)
    if minimum is None:
        return list(recommendations)
    return [r for r in recommendations if r.priority >= minimum]


def sort_by_priority(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    """High first; equal priorities keep collector order."""
    return sorted(recommendations, key=lambda r: r.priority, reverse=True)


def summarize(recommendations: Iterable[Recommendation]) -> RecommendationSummary:
    summary = RecommendationSummary()
    for recommendation in recommendations:
        summary.total += 1
        if recommendation.priority == Priority.HIGH:
            summary.high += 1
        elif recommendation.priority == Priority.MEDIUM:
            summary.medium += 1
        else:
            summary.low += 1
        summary.by_area[recommendation.area] = summary.by_area.get(recommendation.area, 0) + 1
    return summary


def tally_by_area(recommendations: Iterable[Recommendation]) -> Dict[str, Dict[Priority, int]]:
    """Area -> per-priority counts, areas in first-seen order."""
    tally: Dict[str, Dict[Priority, int]] = {}
    for recommendation in recommendations:
        counts = tally.setdefault(
            recommendation.area,
            {Priority.HIGH: 0, Priority.MEDIUM: 0, Priority.LOW: 0}
        )
        counts[recommendation.priority] += 1
    return tally


def export_rows(recommendations: Iterable[Recommendation]) -> List[Dict[str, Any]]:
    """Data shape handed to exporters."""
    rows = []
    for recommendation in recommendations:
        row = {
            'area': recommendation.area,
            'priority': int(recommendation.priority),
            'priority_label': recommendation.priority.label,
            'title': recommendation.title,
            'details': recommendation.details,
            'explanation': recommendation.explanation,
        }
        if recommendation.has_files():
            row['affected_files'] = list(recommendation.files)
        if recommendation.has_metadata():
            row['metadata'] = dict(recommendation.metadata)
        rows.append(row)
    return rows
