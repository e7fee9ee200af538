"""Walk a paged listing API until the server stops reporting a next page."""

from __future__ import annotations

from typing import Any, Callable, List, TypeVar

P = TypeVar("P")


def _json_list(page: Any) -> List[Any]:
    data = page.json()
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list page, got {type(data).__name__}.")
    return data


def paginate(
    first_page: P,
    has_next_page: Callable[[P], bool],
    get_next_page: Callable[[P], P],
    extract: Callable[[P], List[Any]] = _json_list,
) -> List[Any]:
    """Concatenate every page's items in server order.

    There is no page cap; a failing page fetch propagates and nothing
    collected so far is returned.
    """
    page = first_page
    items: List[Any] = list(extract(page))
    while has_next_page(page):
        page = get_next_page(page)
        items.extend(extract(page))
    return items


__all__ = ["paginate"]
