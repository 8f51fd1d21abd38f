from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)

SEED_MAX = 0xFFFFFFFF

_entropy = random.SystemRandom()


def resolve_seed(configured: int) -> int:
    """Return the world seed for one generation pass.

    0 draws a fresh 32-bit value from the OS entropy source; anything else is
    returned unchanged so a configured world is reproducible.
    """
    if configured == 0:
        seed = _entropy.getrandbits(32)
        logger.debug("seed 0 configured, drew random seed %d", seed)
        return seed
    return int(configured)
