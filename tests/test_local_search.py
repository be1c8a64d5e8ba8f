from typing import List, Optional

import pytest

from almanac.search.filters import SearchFilters, matches
from almanac.search.local import local_search
from almanac.search.scoring import matches_query, score
from almanac.storage.models import Article


def make_article(
    slug: str,
    title: str,
    *,
    description: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[List[str]] = None,
    content: str = "",
) -> Article:
    return Article(
        slug=slug,
        title=title,
        description=description,
        category=category,
        tags=tags or [],
        content=content,
    )


@pytest.fixture()
def scenario() -> List[Article]:
    return [
        make_article("ai", "Artificial Intelligence", category="Technology", tags=["AI"]),
        make_article("bread", "Sourdough Bread", category="Food", tags=["baking"]),
    ]


@pytest.fixture()
def library() -> List[Article]:
    return [
        make_article("body-only", "Gardening", content="A note on python snakes"),
        make_article(
            "title-hit",
            "Python Basics",
            description="Learn the language",
            category="Programming",
            tags=["python", "beginner"],
            content="python everywhere",
        ),
        make_article("desc-hit", "Scripting", description="Why Python?", category="Programming"),
        make_article("tag-hit", "Automation", tags=["Python3"], category="Ops"),
        make_article("cat-hit", "Snakes", category="Pythonidae"),
        make_article("miss", "Cooking", category="Food", content="nothing relevant"),
    ]


# ---------- Scorer ----------


def test_score_weights_are_additive() -> None:
    article = make_article(
        "x",
        "Python",
        description="python",
        category="python",
        tags=["python"],
        content="python",
    )
    assert score(article, "python") == 10 + 5 + 3 + 2 + 1


@pytest.mark.parametrize(
    "slug,expected",
    [("body-only", 1), ("desc-hit", 5), ("tag-hit", 3), ("cat-hit", 2), ("miss", 0)],
)
def test_score_single_field(library: List[Article], slug: str, expected: int) -> None:
    article = next(a for a in library if a.slug == slug)
    assert score(article, "python") == expected
    assert matches_query(article, "python") is (expected > 0)


def test_score_handles_missing_optional_fields() -> None:
    assert score(make_article("bare", "Bare"), "zzz") == 0


# ---------- Filter predicate ----------


def test_filter_absent_dimensions_never_exclude(scenario: List[Article]) -> None:
    assert all(matches(a, None) for a in scenario)
    assert all(matches(a, SearchFilters()) for a in scenario)


def test_filter_category_is_exact_and_case_sensitive(scenario: List[Article]) -> None:
    ai = scenario[0]
    assert matches(ai, SearchFilters(category="Technology"))
    assert not matches(ai, SearchFilters(category="technology"))
    assert not matches(make_article("nocat", "No Category"), SearchFilters(category="Technology"))


def test_filter_tags_use_or_semantics(scenario: List[Article]) -> None:
    ai = scenario[0]
    assert matches(ai, SearchFilters(tags=["AI", "unrelated"]))
    assert not matches(ai, SearchFilters(tags=["ai"]))
    assert not matches(make_article("notags", "No tags"), SearchFilters(tags=["AI"]))


def test_filters_build_drops_blank_values() -> None:
    f = SearchFilters.build(category="", tags=["", " a ", "b"])
    assert f.category is None
    assert f.tags == ["a", "b"]
    assert SearchFilters.build().is_empty


# ---------- Local engine ----------


def test_scenario_queries(scenario: List[Article]) -> None:
    assert [a.slug for a in local_search(scenario, "intelligence")] == ["ai"]
    assert local_search(scenario, "bread", SearchFilters(category="Technology")) == []
    assert [a.slug for a in local_search(scenario, "a")] == ["ai", "bread"]


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_returns_empty(library: List[Article], query: str) -> None:
    assert local_search(library, query) == []
    assert local_search(library, query, SearchFilters(category="Programming")) == []


def test_ranking_is_descending_by_score(library: List[Article]) -> None:
    results = local_search(library, "PYTHON")
    assert [a.slug for a in results] == ["title-hit", "desc-hit", "tag-hit", "cat-hit", "body-only"]
    scores = [score(a, "python") for a in results]
    assert scores == sorted(scores, reverse=True)


def test_equal_scores_keep_store_order() -> None:
    docs = [make_article(f"d{i}", f"Topic {i}") for i in range(6)]
    assert [a.slug for a in local_search(docs, "topic")] == [d.slug for d in docs]
    reversed_docs = list(reversed(docs))
    assert [a.slug for a in local_search(reversed_docs, "topic")] == [
        d.slug for d in reversed_docs
    ]


def test_title_substring_is_always_included(library: List[Article]) -> None:
    for article in library:
        query = article.title[1:4]
        results = local_search(library, query)
        assert article in results
        assert score(article, query.lower()) >= 10


def test_filtered_results_respect_filters(library: List[Article]) -> None:
    by_cat = local_search(library, "python", SearchFilters(category="Programming"))
    assert [a.slug for a in by_cat] == ["title-hit", "desc-hit"]
    assert all(a.category == "Programming" for a in by_cat)

    by_tag = local_search(library, "python", SearchFilters(tags=["beginner", "Python3"]))
    assert [a.slug for a in by_tag] == ["title-hit", "tag-hit"]
    assert all(set(a.tags) & {"beginner", "Python3"} for a in by_tag)


def test_search_is_idempotent(library: List[Article]) -> None:
    first = local_search(library, "python", SearchFilters(tags=["python"]))
    second = local_search(library, "python", SearchFilters(tags=["python"]))
    assert first == second


def test_no_result_cap() -> None:
    docs = [make_article(f"n{i}", "Same title") for i in range(120)]
    assert len(local_search(docs, "same")) == 120
