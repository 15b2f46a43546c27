"""Idempotency key generation."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def generate_idempotency_key(prefix: str, *elements: str, now: Optional[datetime] = None) -> str:
    """Join prefix, elements and a second-resolution timestamp with underscores.

    ``generate_idempotency_key("pay", "u1", "o2")`` gives e.g.
    ``pay_u1_o2_20250120153000``.
    """
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return "_".join([prefix, *elements, timestamp])
