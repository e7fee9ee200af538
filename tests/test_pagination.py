"""Tests for src.retrieval.pagination ensuring every page is concatenated in order.

Run with coverage:
    pytest tests/test_pagination.py --maxfail=1 -v --cov=src.retrieval.pagination --cov-report=term-missing
"""

from unittest.mock import MagicMock

import pytest

from src.retrieval.pagination import paginate


def _pages(sizes):
    pages = []
    counter = 0
    for index, size in enumerate(sizes):
        items = list(range(counter, counter + size))
        counter += size
        pages.append({"items": items, "next": index + 1 if index + 1 < len(sizes) else None})
    return pages


def test_paginate_concatenates_all_pages_in_order():
    pages = _pages([3, 1, 4, 0, 2])
    result = paginate(
        pages[0],
        has_next_page=lambda page: page["next"] is not None,
        get_next_page=lambda page: pages[page["next"]],
        extract=lambda page: page["items"],
    )
    assert result == list(range(10))


def test_paginate_single_page_does_not_fetch():
    fetch = MagicMock()
    result = paginate({"items": ["a"]}, lambda page: False, fetch, extract=lambda page: page["items"])
    assert result == ["a"]
    fetch.assert_not_called()


def test_paginate_propagates_page_failure():
    pages = _pages([2, 2])

    def boom(page):
        raise RuntimeError("page 2 failed")

    with pytest.raises(RuntimeError):
        paginate(pages[0], lambda page: page["next"] is not None, boom, extract=lambda page: page["items"])


def test_paginate_reads_json_lists_by_default():
    first = MagicMock()
    first.json.return_value = [{"id": 1}]
    second = MagicMock()
    second.json.return_value = [{"id": 2}, {"id": 3}]
    result = paginate(first, lambda page: page is first, lambda page: second)
    assert [entry["id"] for entry in result] == [1, 2, 3]


def test_paginate_rejects_non_list_payload():
    page = MagicMock()
    page.json.return_value = {"message": "Not Found"}
    with pytest.raises(ValueError):
        paginate(page, lambda p: False, lambda p: p)
