"""Tests for WeightedRecordIndex: scoring, ordering, thresholds, snapshots."""

from dataclasses import replace

from unirecords.application.search.field_config import DOCUMENT_FIELDS, USER_FIELDS
from unirecords.application.search.index import WeightedRecordIndex
from unirecords.domain.enums import EntityType


def _index(*records, config=DOCUMENT_FIELDS) -> WeightedRecordIndex:
    index = WeightedRecordIndex(config)
    index.build(records)
    return index


def test_unbuilt_index_returns_empty() -> None:
    index = WeightedRecordIndex(DOCUMENT_FIELDS)
    assert not index.is_built
    assert index.size == 0
    assert index.built_at is None
    assert index.search("thesis") == []


def test_single_document_found_and_unrelated_query_empty(make_document) -> None:
    """'thesis' finds the thesis report with a near-zero score; 'xyzzy' finds nothing."""
    doc = make_document("doc-1", "Final Thesis Report", tags=("research",))
    index = _index(doc)

    results = index.search("thesis")
    assert len(results) == 1
    assert results[0].item is doc
    assert results[0].entity_type is EntityType.DOCUMENT
    assert results[0].score < 0.01
    assert results[0].matches[0].key == "title"
    assert results[0].matches[0].indices == ((6, 12),)

    assert index.search("xyzzy") == []


def test_repeated_searches_are_identical(record_source) -> None:
    index = _index(*record_source.records[EntityType.DOCUMENT])
    first = index.search("report")
    for _ in range(3):
        again = index.search("report")
        assert [r.item.id for r in again] == [r.item.id for r in first]
        assert [r.score for r in again] == [r.score for r in first]


def test_results_sorted_best_first(record_source) -> None:
    index = _index(*record_source.records[EntityType.DOCUMENT])
    results = index.search("transcript")
    assert results[0].item.id == "doc-transcript"
    scores = [r.score for r in results]
    assert scores == sorted(scores)


def test_equal_scores_keep_build_order(make_document) -> None:
    a = make_document("doc-a", "Lab safety policy")
    b = make_document("doc-b", "Lab safety policy")
    results = _index(a, b).search("safety")
    assert [r.item.id for r in results] == ["doc-a", "doc-b"]
    assert results[0].score == results[1].score


def test_raising_field_weight_improves_single_field_match(make_document) -> None:
    """A record matching only on title ranks at least as well when title weighs more."""
    doc = make_document("doc-1", "Hydrology thesis")
    base = _index(doc).search("thesi")
    heavier = _index(doc, config=DOCUMENT_FIELDS.with_weight("title", 0.9)).search(
        "thesi"
    )
    assert [m.key for m in base[0].matches] == ["title"]
    assert heavier[0].score < base[0].score


def test_field_over_threshold_neither_matches_nor_scores(make_document) -> None:
    """A typo'd description above the threshold leaves matches and score untouched."""
    strict = replace(DOCUMENT_FIELDS, match_threshold=0.1)
    with_typo = make_document("doc-1", "thesis", description="thesys")
    title_only = make_document("doc-2", "thesis")

    results = _index(with_typo, title_only, config=strict).search("thesis")
    assert [r.item.id for r in results] == ["doc-1", "doc-2"]
    assert [m.key for m in results[0].matches] == ["title"]
    assert results[0].score == results[1].score


def test_zero_threshold_excludes_partial_word(make_document) -> None:
    strict = replace(DOCUMENT_FIELDS, match_threshold=0.0)
    doc = make_document("doc-1", "Hydrology thesis")
    assert _index(doc, config=strict).search("thesi") == []
    assert len(_index(doc).search("thesi")) == 1


def test_tags_match_element_by_element(make_document) -> None:
    doc = make_document("doc-1", "Annual review", tags=("research", "hydrology"))
    results = _index(doc).search("hydrology")
    assert [(m.key, m.value) for m in results[0].matches] == [("tags", "hydrology")]


def test_query_shorter_than_min_length_or_bad_limit(make_document) -> None:
    index = _index(make_document("doc-1", "a b c"))
    assert index.search("a") == []
    assert index.search("thesis", limit=0) == []


def test_limit_truncates(record_source) -> None:
    index = _index(*record_source.records[EntityType.DOCUMENT])
    assert len(index.search("report", limit=1)) == 1


def test_rebuild_replaces_snapshot(make_document) -> None:
    index = _index(make_document("doc-old", "Old syllabus"))
    old_built_at = index.built_at
    index.build([make_document("doc-new", "New curriculum")])
    assert index.size == 1
    assert index.search("syllabus") == []
    assert index.search("curriculum")[0].item.id == "doc-new"
    assert index.built_at >= old_built_at


def test_typo_of_full_name_outranks_name_inside_query(make_user) -> None:
    """'johnson' prefers 'Johnsen Brown' over 'John Doe', whose first name it merely contains."""
    john = make_user("u1", "jdoe", "John", "Doe")
    johnsen = make_user("u2", "jbrown", "Johnsen", "Brown")
    results = _index(john, johnsen, config=USER_FIELDS).search("johnson")

    assert results[0].item.id == "u2"
    assert results[0].score > 0.0
    for result in results:
        for match in result.matches:
            assert match.key != "profile.first_name" or match.value != "John"
