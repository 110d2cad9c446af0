"""
LIMIT/OFFSET page arithmetic.
"""

from __future__ import annotations

import math


def page_offset(page: int, page_size: int) -> int:
    return max(page - 1, 0) * page_size


def last_page(total_records: int, page_size: int) -> int:
    if total_records <= 0 or page_size <= 0:
        return 1
    return math.ceil(total_records / page_size)
