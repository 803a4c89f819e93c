"""
Application Use Case — Suggestion selection

Sampling happens in process rather than with ORDER BY RANDOM(): the active
ids are fetched, a uniform sample is drawn from them, and only the chosen
rows are loaded. Passing an explicit `rng` (anything with a
random.Random-compatible `sample`) makes the selection reproducible.
"""

import random

from monitoring.domain.exceptions import InvalidPriority
from monitoring.models import Suggestion

DEFAULT_SUGGESTION_LIMIT = 2


def suggestion_to_dict(suggestion):
    return {
        "id": suggestion.id,
        "suggestionText": suggestion.text,
        "category": suggestion.category,
        "priority": suggestion.priority,
        "estimatedSavingsUsd": suggestion.estimated_savings_usd,
    }


def get_active_suggestions(limit=DEFAULT_SUGGESTION_LIMIT, rng=None, priority=None):
    """
    Returns up to `limit` randomly chosen active suggestions, display-shaped.

    Fewer than `limit` active suggestions is not an error: all of them are
    returned. `priority`, when given, restricts the pool to that priority
    (case-insensitive) and raises InvalidPriority for unknown values.
    """
    rng = rng or random

    candidates = Suggestion.objects.filter(is_active=True)
    if priority is not None:
        normalized = str(priority).strip().upper()
        if normalized not in Suggestion.Priority.values:
            raise InvalidPriority(priority)
        candidates = candidates.filter(priority=normalized)

    active_ids = sorted(candidates.values_list("id", flat=True))
    chosen_ids = rng.sample(active_ids, max(0, min(limit, len(active_ids))))

    by_id = Suggestion.objects.in_bulk(chosen_ids)
    return [suggestion_to_dict(by_id[pk]) for pk in chosen_ids if pk in by_id]
