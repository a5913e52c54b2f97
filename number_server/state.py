# number_server/state.py
# Shared read cursor over the loaded numbers, guarded by one lock

import logging
import threading
from collections import namedtuple

from number_server import config
from number_server.helpers import resolve_page_size, page_progress

PageResult = namedtuple('PageResult', ['numbers', 'message', 'count', 'exhausted'])

EXHAUSTED = PageResult(numbers="", message=config.EXHAUSTED_MESSAGE, count=0, exhausted=True)


class NumberStore:
    """
    Owns the number sequence, the message and the cursor.

    The cursor only moves forward. Once it reaches the end of the sequence
    every call returns EXHAUSTED and nothing can rewind it.
    """

    def __init__(self, numbers, message, default_fetch_count, test_number):
        if default_fetch_count <= 0:
            raise ValueError(f"default_fetch_count must be positive, got {default_fetch_count}")
        self._numbers = tuple(numbers)
        self._message = message
        self._default_fetch_count = default_fetch_count
        self._test_number = test_number
        self._start_index = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings, numbers, message):
        return cls(numbers, message, settings.default_fetch_count, settings.test_number)

    @property
    def total(self):
        return len(self._numbers)

    @property
    def start_index(self):
        with self._lock:
            return self._start_index

    @property
    def exhausted(self):
        with self._lock:
            return self._start_index >= len(self._numbers)

    def take_next_page(self, requested_n=None):
        """Return the next page and advance the cursor past it."""
        with self._lock:
            n = resolve_page_size(requested_n, self._default_fetch_count)
            total = len(self._numbers)
            start = self._start_index
            if start >= total:
                logging.debug(f"Fetch after exhaustion ({start} / {total}), n={n}")
                return EXHAUSTED

            end = min(start + n, total)
            page = [self._test_number]
            page.extend(self._numbers[start:end])
            self._start_index = end

            result = PageResult(numbers=",".join(page), message=self._message, count=len(page), exhausted=False)
            progress = page_progress(start, end, total, n)
            logging.info(f"Fetch: progress {progress['consumed']} / {progress['total']}, "
                         f"page {progress['current_page']}, {progress['pages_remaining']} page(s) remaining.")
            logging.debug(f"Response data: {result}")
            return result
