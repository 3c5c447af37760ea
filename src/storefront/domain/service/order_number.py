"""Human-readable order numbers.

Format: ``ORD-<base36 epoch millis>-<5 base36 random chars>``, uppercased.
Collisions are possible but rare; the store's uniqueness constraint is
the backstop.
"""

from __future__ import annotations

import random
import string
from collections.abc import Callable
from datetime import datetime, timezone

PREFIX = "ORD"
RANDOM_LENGTH = 5

_ALPHABET = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_order_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    moment = now or datetime.now(timezone.utc)
    millis = int(moment.timestamp() * 1000)
    chooser = rng or random.SystemRandom()
    suffix = "".join(chooser.choice(_ALPHABET) for _ in range(RANDOM_LENGTH))
    return f"{PREFIX}-{to_base36(millis)}-{suffix}"


OrderNumberGenerator = Callable[[datetime], str]
