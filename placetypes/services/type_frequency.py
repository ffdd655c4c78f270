from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional

from placetypes.domain.errors import EmptyResultError
from placetypes.domain.models import PlaceResult, TypeCount


def count_place_types(results: Iterable[PlaceResult]) -> Counter:
    """Count every category label, keeping labels in first-seen order."""
    counts: Counter = Counter()
    for result in results:
        if not result.types:
            continue
        for place_type in result.types:
            counts[place_type] += 1
    return counts


def aggregate_place_types(
    results: Iterable[PlaceResult],
    limit: Optional[int] = None,
) -> List[TypeCount]:
    """
    Rank category labels by how many times they occur across `results`.

    Sorted by count descending; labels with equal counts keep the order in
    which they were first seen (Counter.most_common sorts stably over
    insertion order). Raises EmptyResultError when no label was found.
    """
    if limit is not None and limit <= 0:
        raise ValueError(f"limit must be positive, got {limit!r}")
    counts = count_place_types(results)
    if not counts:
        raise EmptyResultError("No place types found in the response")
    return [TypeCount(label, count) for label, count in counts.most_common(limit)]
