from django.core.paginator import EmptyPage, Paginator

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def parse_page_params(params):
    """Read page/page_size from query params, clamped to sane bounds."""
    try:
        page = max(int(params.get("page", 1)), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        page_size = int(params.get("page_size", DEFAULT_PAGE_SIZE))
    except (TypeError, ValueError):
        page_size = DEFAULT_PAGE_SIZE
    return page, min(max(page_size, 1), MAX_PAGE_SIZE)


def paginate(items, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> dict:
    """
    Paginate a queryset or list.

    Returns the envelope used by every list endpoint:
    {count, page, page_size, num_pages, has_next, has_previous, results}
    """
    paginator = Paginator(items, page_size)
    try:
        page_obj = paginator.page(page)
    except EmptyPage:
        page_obj = paginator.page(paginator.num_pages)

    return {
        "count": paginator.count,
        "page": page_obj.number,
        "page_size": page_size,
        "num_pages": paginator.num_pages,
        "has_next": page_obj.has_next(),
        "has_previous": page_obj.has_previous(),
        "results": list(page_obj.object_list),
    }
