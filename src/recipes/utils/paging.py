"""Read every row of a Protean query, page by page.

Protean queries return a bounded page by default, so listings that must be
complete walk the result set with offset and limit.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size: int | None = None) -> list:
    page_size = page_size or PAGE_SIZE
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all().items
        items.extend(page)
        if len(page) < page_size:
            return items
        offset += page_size
