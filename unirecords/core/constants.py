"""Core constants: shared literal values for search.

Single source of truth for values that are not configuration (DRY).
"""

# Placeholder "popular searches" shown by the UI. Static: not derived from
# query logs. Replace with real query-frequency tracking when one exists.
POPULAR_SEARCH_TERMS: tuple[tuple[str, int], ...] = (
    ("transcript", 150),
    ("certificate", 120),
    ("assignment", 100),
    ("thesis", 80),
    ("report", 75),
)

# Candidate pool for suggestions (single-type search limit).
SUGGESTION_CANDIDATE_LIMIT = 10
