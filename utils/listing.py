"""
Shared list pipeline for location-aware listings (products, jobs, events, artistes).

The ORM applies filters and the requested ordering; radius filtering then runs
in Python (see utils.location) and the result is paginated.
"""

from typing import Dict, Sequence

from .location import filter_by_radius, parse_geo_params
from .pagination import paginate, parse_page_params
from .service_base import ErrorCodes, ServiceResult, service_err, service_ok

DISTANCE_SORT = "distance"
BOOSTED_ORDERING = ("-is_boosted", "-boost_score", "-created_at")


def build_listing(queryset, params, sort_orders: Dict[str, Sequence[str]], default_sort: str) -> ServiceResult:
    """
    Order, radius-filter and paginate a filtered queryset.

    ``sort_orders`` maps each accepted ``sort_by`` value to ORM ordering fields.
    ``distance`` is always accepted but needs ``lat``/``lon``.
    """
    sort_by = params.get("sort_by") or default_sort
    if sort_by != DISTANCE_SORT and sort_by not in sort_orders:
        accepted = ", ".join([*sort_orders, DISTANCE_SORT])
        return service_err(ErrorCodes.INVALID_INPUT, f"sort_by must be one of: {accepted}")

    geo = parse_geo_params(params)
    if sort_by == DISTANCE_SORT and geo is None:
        return service_err(ErrorCodes.INVALID_INPUT, "Sorting by distance requires lat and lon")

    ordering = sort_orders.get(sort_by, sort_orders[default_sort])
    items = queryset.order_by(*ordering)

    if geo is not None:
        ordered = list(items)
        items = filter_by_radius(ordered, *geo)
        if sort_by != DISTANCE_SORT:
            rank = {id(item): position for position, item in enumerate(ordered)}
            items.sort(key=lambda item: rank[id(item)])

    page, page_size = parse_page_params(params)
    return service_ok(paginate(items, page, page_size))
