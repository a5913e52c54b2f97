# number_server/helpers.py
# Page size resolution and progress figures for the fetch log line

import re

PAGE_SIZE_REGEX = re.compile(r'\+?[0-9]+')


def resolve_page_size(raw, default):
    """
    Returns the page size to use for a request.

    `raw` is the untrusted `n` value (a query string value, an int or None).
    Strings must be plain ASCII digits with an optional leading '+'. Anything
    that is not a positive integer falls back to `default`, so `n=abc`,
    `n=0`, `n=-3`, `n=1_0` and `n= 3 ` all behave like a missing `n`.
    """
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        n = raw
    elif isinstance(raw, str) and PAGE_SIZE_REGEX.fullmatch(raw):
        n = int(raw)
    else:
        return default
    return n if n > 0 else default


def page_progress(start_index, end_index, total, n):
    """Pure projection of one page read: consumed/total, page number, pages left after this one."""
    items_remaining = max(total - start_index, 0)
    pages_remaining = -(-items_remaining // n)  # ceil
    return {
        "consumed": end_index,
        "total": total,
        "current_page": start_index // n + 1,
        "pages_remaining": max(pages_remaining - 1, 0),
    }
