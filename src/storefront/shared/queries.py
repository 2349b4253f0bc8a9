"""Reading every result of a query past the storage page size.

Protean querysets return at most one page (100 rows by default). Listings
and counters that must cover every row read the query page by page.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size=PAGE_SIZE):
    """All results of a Protean ``QuerySet``, in the query's order."""
    items, offset = [], 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        items.extend(page.items)
        offset += len(page.items)
        if not page.items or offset >= page.total:
            return items
