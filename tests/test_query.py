#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from unittest import TestCase

import pytest

from xformview.query import ListQuery, SortDirection, query_from_url, query_to_url


class ListQueryTest(TestCase):
    def test_defaults(self):
        query = ListQuery()
        self.assertEqual(0, query.offset)
        self.assertEqual(20, query.page_size)
        self.assertEqual("", query.search)
        self.assertEqual("_id", query.sort_field)
        self.assertIs(SortDirection.ASC, query.sort_direction)
        self.assertEqual(0, query.page_index)
        self.assertFalse(query.is_filtered)

    def test_with_search_resets_offset(self):
        query = ListQuery(offset=40).with_search("logs")
        self.assertEqual(ListQuery(offset=0, search="logs"), query)
        self.assertTrue(query.is_filtered)

    def test_with_sort_resets_offset(self):
        query = ListQuery(offset=40).with_sort("transform.source_index", "desc")
        self.assertEqual(0, query.offset)
        self.assertEqual("transform.source_index", query.sort_field)
        self.assertIs(SortDirection.DESC, query.sort_direction)

    def test_with_sort_rejects_unsortable_field(self):
        with pytest.raises(ValueError, match="not sortable"):
            ListQuery().with_sort("transform.description", "asc")
        with pytest.raises(ValueError):
            ListQuery().with_sort("_id", "up")

    def test_with_page(self):
        query = ListQuery(page_size=20, search="x").with_page(2)
        self.assertEqual(40, query.offset)
        self.assertEqual(2, query.page_index)
        self.assertEqual("x", query.search)
        with pytest.raises(ValueError, match="must not be negative"):
            query.with_page(-1)

    def test_with_page_size(self):
        query = ListQuery(offset=40).with_page_size(50)
        self.assertEqual(ListQuery(offset=0, page_size=50), query)
        with pytest.raises(ValueError, match="Page size must be one of"):
            query.with_page_size(7)

    def test_is_immutable(self):
        query = ListQuery()
        query.with_search("logs")
        self.assertEqual(ListQuery(), query)


class QueryUrlTest(TestCase):
    def test_to_url(self):
        self.assertEqual(
            "from=0&search=&size=20&sortDirection=asc&sortField=_id",
            query_to_url(ListQuery()),
        )
        self.assertEqual(
            "from=40&search=my+logs&size=20&sortDirection=desc"
            "&sortField=transform.target_index",
            query_to_url(
                ListQuery(
                    offset=40,
                    search="my logs",
                    sort_field="transform.target_index",
                    sort_direction=SortDirection.DESC,
                )
            ),
        )

    def test_from_url(self):
        self.assertEqual(
            ListQuery(
                offset=20,
                page_size=10,
                search="logs",
                sort_field="transform.enabled",
                sort_direction=SortDirection.DESC,
            ),
            query_from_url(
                "?from=20&size=10&search=logs"
                "&sortField=transform.enabled&sortDirection=desc"
            ),
        )

    def test_from_empty_url(self):
        self.assertEqual(ListQuery(), query_from_url(""))
        self.assertEqual(ListQuery(), query_from_url(None))
        self.assertEqual(ListQuery(page_size=50), query_from_url("", 50))

    def test_from_url_with_invalid_values(self):
        self.assertEqual(
            ListQuery(),
            query_from_url(
                "from=-5&size=7&sortField=foo&sortDirection=up&unknown=1"
            ),
        )
        self.assertEqual(ListQuery(), query_from_url("from=abc&size="))

    def test_from_url_accepts_plain_digits_only(self):
        self.assertEqual(ListQuery(), query_from_url("from=2_0&size=1_0"))
        # "+" decodes to a space
        self.assertEqual(ListQuery(), query_from_url("from=+20&size=%2010"))
        # ARABIC-INDIC DIGIT TWO, ZERO
        self.assertEqual(ListQuery(), query_from_url("from=%D9%A2%D9%A0"))
        self.assertEqual(
            ListQuery(offset=20, page_size=10), query_from_url("from=20&size=10")
        )

    def test_unaligned_offset_is_kept(self):
        query = query_from_url("from=25&size=20")
        self.assertEqual(25, query.offset)
        self.assertEqual(1, query.page_index)

    def test_round_trip(self):
        for query in (
            ListQuery(),
            ListQuery(offset=15, page_size=5, search="a&b=c"),
            ListQuery(
                sort_field="transform.enabled", sort_direction=SortDirection.DESC
            ),
        ):
            self.assertEqual(query, query_from_url(query_to_url(query)))
        url = "from=20&search=x&size=10&sortDirection=desc&sortField=_id"
        self.assertEqual(url, query_to_url(query_from_url(url)))
