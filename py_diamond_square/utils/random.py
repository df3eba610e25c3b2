"""
Default random source.

Terrain code draws randomness only through AleaPRNG instances. When a caller
does not supply a seed or an error model, the module-level generator managed
here is used. It is seeded from ``settings.default_seed`` (or "default") and
kept for the life of the process, so repeated calls continue one stream
instead of restarting it. Python's random and NumPy's random are not used
anywhere in the package so that seeded output is stable across platforms.
"""

from typing import Optional

from ..config import settings
from ..core.alea_prng import AleaPRNG, Seed

# Global PRNG instance
_prng: Optional[AleaPRNG] = None
# True once set_random_seed() has overridden the configured seed
_explicit = False


def _configured_seed() -> Seed:
    return settings.default_seed if settings.default_seed is not None else "default"


def set_random_seed(seed: Seed) -> AleaPRNG:
    """
    Replace the default generator with one seeded from ``seed``.

    Args:
        seed: Seed string or number

    Returns:
        The new default AleaPRNG
    """
    global _prng, _explicit
    _prng = AleaPRNG(seed)
    _explicit = True
    return _prng


def get_prng() -> AleaPRNG:
    """
    Get the default AleaPRNG instance.

    Created on first use from the configured seed, and rebuilt only when
    that setting changes while no explicit seed is in effect.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None or (not _explicit and _prng.seed != _configured_seed()):
        _prng = AleaPRNG(_configured_seed())
    return _prng


def reset_random() -> None:
    """Drop the default generator so the next get_prng() starts fresh."""
    global _prng, _explicit
    _prng = None
    _explicit = False
