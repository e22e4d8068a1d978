"""
Synthetic price generation for the mock search path.
"""

import math
import random
from typing import Optional

from app.services.destinations import get_base_price


class MockPricer:
    """
    Jittered prices around each destination's base price.

    The random source is injectable so tests can pin the output; the
    default instance is unseeded and two calls for the same code may differ.
    """

    JITTER = 0.2  # total spread, i.e. +/-10%

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_mock_price(self, code: str) -> int:
        base_price = get_base_price(code)
        variation = (self.rng.random() - 0.5) * self.JITTER
        # Round half up, not banker's rounding
        return math.floor(base_price * (1 + variation) + 0.5)
