"""Read every row a Protean query matches, one page at a time."""

from collections.abc import Iterator

PAGE_SIZE = 500


def iterate(query, page_size: int | None = None) -> Iterator:
    """Yield each matching record, fetching ``page_size`` rows per round trip."""
    page_size = page_size or PAGE_SIZE
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        yield from page.items
        offset += page_size
        if offset >= page.total or not page.items:
            return


def fetch_all(query, page_size: int | None = None) -> list:
    return list(iterate(query, page_size))
