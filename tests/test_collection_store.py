"""Tests for sorting, filtering and paging of the report collection."""

from datetime import date

import pytest

from core.errors import InvalidPageError
from core.models import Report
from core.services.collection_store import CollectionStore, ReportQuery, count_pages
from core.services.normalizer import normalize
from core.services.sort_service import SortService, numeric_id


def _report(report_id, title="T", day=None):
    return Report(
        id=report_id,
        title=title,
        date=date(2024, 1, day) if day is not None else None,
        author="-",
    )


def _store(reports):
    store = CollectionStore()
    store.replace_all(reports)
    return store


class TestSortService:
    """Canonical order: date desc, then id desc."""

    def test_newer_first(self):
        """Two reports on different days come back newest first."""
        store = _store(
            [
                normalize({"id": 1, "title": "A", "date": "2024-01-01"}),
                normalize({"id": 2, "title": "B", "date": "2024-01-02"}),
            ]
        )
        view = store.view(ReportQuery(search_term="", page=1, page_size=5))
        assert [r.id for r in view.items] == [2, 1]

    def test_same_date_ordered_by_id_desc(self):
        ordered = SortService().sort([_report(3, day=5), _report(10, day=5), _report(7, day=5)])
        assert [r.id for r in ordered] == [10, 7, 3]

    def test_numeric_string_ids_compare_numerically(self):
        ordered = SortService().sort([_report("9", day=1), _report("10", day=1)])
        assert [r.id for r in ordered] == ["10", "9"]

    def test_unknown_dates_sort_last_by_id(self):
        ordered = SortService().sort(
            [_report(5), _report(1, day=1), _report(8), _report(2, day=30)]
        )
        assert [r.id for r in ordered] == [2, 1, 8, 5]

    def test_non_numeric_ids_compare_as_zero(self):
        ordered = SortService().sort([_report("abc", day=1), _report(-1, day=1), _report(1, day=1)])
        assert [r.id for r in ordered] == [1, "abc", -1]

    def test_sort_is_deterministic_and_does_not_mutate(self):
        reports = [_report(i, day=(i % 3) + 1) for i in range(1, 13)]
        original = list(reports)
        first = SortService().sort(reports)
        second = SortService().sort(list(reversed(reports)))

        assert reports == original
        assert [r.id for r in first] == [r.id for r in second]

    @pytest.mark.parametrize(
        "value, expected",
        [(7, 7), ("12", 12.0), ("x", 0), (None, 0), (True, 0), ("nan", 0), (2.5, 2.5)],
    )
    def test_numeric_id(self, value, expected):
        assert numeric_id(value) == expected


class TestFilter:
    """Case-insensitive title filtering."""

    def test_no_match(self):
        """A term matching no title gives an empty first page."""
        store = _store([_report(1, "A", 1), _report(2, "B", 2)])
        view = store.view(ReportQuery(search_term="z", page=1, page_size=5))

        assert view.items == ()
        assert view.total_filtered_count == 0
        assert view.total_pages == 1

    def test_case_insensitive_substring(self):
        store = _store(
            [
                _report(1, "Morning Play", 1),
                _report(2, "Nap time", 2),
                _report(3, "afternoon PLAYGROUND", 3),
            ]
        )
        view = store.view(ReportQuery(search_term="play", page=1, page_size=5))
        assert [r.id for r in view.items] == [3, 1]

    @pytest.mark.parametrize("term", ["", "a", "A", "report", "zz", "1"])
    def test_included_and_excluded_items(self, term):
        titles = ["Alpha", "beta", "Report 1", "report 12", "GAMMA"]
        store = _store([_report(i, t, i) for i, t in enumerate(titles, start=1)])

        included = store.filtered(term)
        excluded = [r for r in store.reports if r not in included]

        assert all(term.lower() in r.title.lower() for r in included)
        assert all(term.lower() not in r.title.lower() for r in excluded)

    def test_empty_term_matches_everything(self):
        store = _store([_report(i, day=i) for i in range(1, 4)])
        assert store.view(ReportQuery()).total_filtered_count == 3


class TestPagination:
    """Page slicing and page range validation."""

    @pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 10, 11, 23])
    def test_pages_cover_filtered_set_exactly_once(self, count):
        store = _store([_report(i, day=(i % 28) + 1) for i in range(1, count + 1)])
        first = store.view(ReportQuery(page=1, page_size=5))

        seen = []
        for page in range(1, first.total_pages + 1):
            seen.extend(r.id for r in store.view(ReportQuery(page=page, page_size=5)).items)

        assert seen == [r.id for r in store.reports]
        assert len(seen) == len(set(seen))
        assert first.total_pages == max(1, -(-count // 5))

    def test_page_slice(self):
        store = _store([_report(i, day=i) for i in range(1, 13)])
        view = store.view(ReportQuery(page=3, page_size=5))

        assert [r.id for r in view.items] == [2, 1]
        assert view.total_pages == 3
        assert view.total_filtered_count == 12

    @pytest.mark.parametrize("page", [0, -1, 4])
    def test_out_of_range_page_raises(self, page):
        store = _store([_report(i, day=i) for i in range(1, 13)])
        with pytest.raises(InvalidPageError):
            store.view(ReportQuery(page=page, page_size=5))

    def test_page_one_always_valid_when_empty(self):
        view = CollectionStore().view(ReportQuery(page=1))
        assert view.items == ()
        assert view.total_pages == 1

    def test_bad_page_size_raises(self):
        with pytest.raises(InvalidPageError):
            CollectionStore().view(ReportQuery(page=1, page_size=0))

    def test_count_pages(self):
        assert count_pages(0, 5) == 1
        assert count_pages(5, 5) == 1
        assert count_pages(6, 5) == 2


class TestMutation:
    """replace_all / remove_by_ids."""

    def test_remove_by_ids_returns_removed_count(self):
        store = _store([_report(i, day=i) for i in range(1, 6)])

        assert store.remove_by_ids({2, 4, 99}) == 2
        assert store.ids() == frozenset({1, 3, 5})
        assert len(store) == 3

    def test_remove_nothing(self):
        store = _store([_report(1, day=1)])
        assert store.remove_by_ids(set()) == 0
        assert store.remove_by_ids({42}) == 0
        assert len(store) == 1

    def test_replace_all_copies_input(self):
        reports = [_report(1, day=1)]
        store = _store(reports)
        reports.append(_report(2, day=2))

        assert len(store) == 1
        assert isinstance(store.reports, tuple)

    def test_replace_all_swaps_collection(self):
        store = _store([_report(1, day=1), _report(2, day=2)])
        store.replace_all([_report(3, day=3)])
        assert store.ids() == frozenset({3})
