from __future__ import annotations

import re


def name_matches(pattern: str | re.Pattern[str] | None, name: str) -> bool:
    # No pattern selects everything; otherwise an unanchored search against the literal name.
    if pattern is None:
        return True
    if isinstance(pattern, str):
        return re.search(pattern, name) is not None
    return pattern.search(name) is not None
