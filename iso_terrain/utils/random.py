"""
Random number generation utilities.

Generators are always built explicitly and handed to the code that needs
them, so two terrains generated from the same seed are identical.
"""

import uuid
from typing import Optional

from ..core.alea_prng import AleaPRNG


def new_seed() -> str:
    """Return a fresh seed string for unseeded runs."""
    return uuid.uuid4().hex[:12]


def make_prng(seed: Optional[str] = None) -> AleaPRNG:
    """
    Build an Alea PRNG for the given seed.

    Args:
        seed: Seed string to use, a random one is chosen when omitted

    Returns:
        AleaPRNG instance
    """
    return AleaPRNG(seed if seed is not None else new_seed())


def derive_seed(seed: str, stage: str) -> str:
    """Derive a stage specific seed so stages draw from independent streams."""
    return f"{seed}:{stage}"
