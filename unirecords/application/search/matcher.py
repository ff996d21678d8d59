"""Field matcher: fuzzy score of a query against one field value.

FieldMatcher is the strategy protocol used by WeightedRecordIndex, so the
scoring algorithm can be swapped without touching the index or the
orchestrator. Contract for every implementation:

- score is in [0, 1]; 0 is an exact match, 1 is no match.
- a score above options.threshold is reported as NO_MATCH.
- matched ranges shorter than options.min_match_char_length are dropped;
  a match with no remaining ranges is NO_MATCH.
- empty query matches nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rapidfuzz import fuzz

# Added score for a range that covers only part of the word it falls in,
# scaled by the uncovered fraction ("john" in "johnson" ranks below "john").
_PARTIAL_WORD_PENALTY = 0.1


@dataclass(frozen=True)
class MatchOptions:
    """Permissiveness of matching: 0 = exact only, 1 = match anything."""

    threshold: float = 0.4
    min_match_char_length: int = 1


@dataclass(frozen=True)
class FieldMatch:
    """Score and half-open (start, end) matched ranges in the field value."""

    score: float
    ranges: tuple[tuple[int, int], ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.ranges)


NO_MATCH = FieldMatch(score=1.0)


class FieldMatcher(Protocol):
    """Strategy for approximate matching of a query against a field value."""

    def score(self, query: str, value: str, options: MatchOptions) -> FieldMatch:
        """Return the match score and ranges, or NO_MATCH."""


class FuzzyFieldMatcher:
    """Case-insensitive partial matching tolerant of typos and word reordering.

    Similarity is the better of a whole-query partial alignment and, for
    multi-word queries, the length-weighted mean of each word's own partial
    alignment. Edit error (1 - similarity) plus a small penalty for matching
    only part of a word gives the score.
    """

    def score(self, query: str, value: str, options: MatchOptions) -> FieldMatch:
        needle = query.strip().lower()
        haystack = value.lower()
        if not needle or not haystack:
            return NO_MATCH
        if len(needle) < options.min_match_char_length:
            return NO_MATCH

        similarity, ranges = _align(needle, haystack)
        ranges = tuple(
            (start, end)
            for start, end in ranges
            if end - start >= options.min_match_char_length
        )
        if not ranges:
            return NO_MATCH

        score = 1.0 - similarity / 100.0
        score += _PARTIAL_WORD_PENALTY * _uncovered_word_fraction(haystack, ranges)
        score = min(max(score, 0.0), 1.0)
        if score > options.threshold:
            return NO_MATCH
        return FieldMatch(score=score, ranges=ranges)


def _align(needle: str, haystack: str) -> tuple[float, tuple[tuple[int, int], ...]]:
    """Return (similarity 0-100, matched ranges in haystack)."""
    best_score, best_range = _partial_alignment(needle, haystack)
    best_ranges = (best_range,) if best_range is not None and best_score > 0 else ()

    words = needle.split()
    if len(words) > 1:
        weighted = 0.0
        word_ranges: list[tuple[int, int]] = []
        for word in words:
            similarity, word_range = _partial_alignment(word, haystack)
            if word_range is None:
                continue
            weighted += similarity * len(word)
            word_ranges.append(word_range)
        per_word = weighted / sum(len(w) for w in words)
        if per_word > best_score and word_ranges:
            best_score = per_word
            best_ranges = _merge_ranges(word_ranges)

    return best_score, best_ranges


def _partial_alignment(needle: str, haystack: str) -> tuple[float, tuple[int, int] | None]:
    """Best alignment of needle inside haystack as (similarity, range).

    partial_ratio_alignment slides the shorter string over the longer one, so
    a value shorter than the query would be searched for inside the query.
    In that case the value can account for at most len(haystack) query
    characters and the rest count as edit errors.
    """
    aligned = fuzz.partial_ratio_alignment(needle, haystack)
    if aligned is None or aligned.dest_end <= aligned.dest_start:
        return 0.0, None
    if len(needle) > len(haystack):
        return aligned.score * len(haystack) / len(needle), (0, len(haystack))
    return aligned.score, (aligned.dest_start, aligned.dest_end)


def _merge_ranges(ranges: list[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    """Sort and merge overlapping or touching ranges."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


def _uncovered_word_fraction(text: str, ranges: tuple[tuple[int, int], ...]) -> float:
    """Mean fraction of each range's enclosing word(s) not covered by the range."""
    fractions = []
    for start, end in ranges:
        word_start, word_end = start, end
        while word_start > 0 and text[word_start - 1].isalnum():
            word_start -= 1
        while word_end < len(text) and text[word_end].isalnum():
            word_end += 1
        fractions.append(1.0 - (end - start) / (word_end - word_start))
    return sum(fractions) / len(fractions)
