from __future__ import annotations

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": str(size), "r": rating, "d": default})
    return f"{GRAVATAR_BASE}/{digest}?{query}"
