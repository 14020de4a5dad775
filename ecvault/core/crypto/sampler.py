"""
Ephemeral Scalar Sampling
=========================

Rejection sampling of a one-time secret scalar r and its public point
R = r * G.

A candidate is rejected when:
    - r == 0 or r >= N
    - (r * G).x mod N == 0

The second condition has probability ~1/N on real curves, so one draw is
expected. The attempt cap is a fuse against a broken random source and
never trips under a working CSPRNG.
"""

from __future__ import annotations

import itertools
import logging
import secrets
from typing import Callable, Final, Optional, Tuple

from ecdsa.ellipticcurve import AbstractPoint

from ecvault.core.crypto.curves import CurveParams, is_infinity
from ecvault.core.exceptions import EntropySourceError, InvalidArgumentError

DEFAULT_MAX_SAMPLE_ATTEMPTS: Final[int] = 1000

_log = logging.getLogger("ecvault.crypto.sampler")


def sample_ephemeral(
    curve: CurveParams,
    *,
    max_attempts: Optional[int] = DEFAULT_MAX_SAMPLE_ATTEMPTS,
    randbits: Callable[[int], int] = secrets.randbits,
) -> Tuple[int, AbstractPoint]:
    """
    Draw an ephemeral scalar and its public point.

    Args:
        curve: Curve providing generator G and order N
        max_attempts: Maximum number of draws, None for no limit
        randbits: Source of k-bit random integers. Must be a CSPRNG;
            only tests should override it.

    Returns:
        Tuple (r, R) with 0 < r < N and R = r * G

    Raises:
        InvalidArgumentError: If the curve order is not a positive integer
        EntropySourceError: If max_attempts draws were all rejected
    """
    order = curve.order
    if not isinstance(order, int) or isinstance(order, bool) or order <= 0:
        raise InvalidArgumentError("Curve order must be a positive integer")
    if max_attempts is not None and max_attempts <= 0:
        raise InvalidArgumentError("max_attempts must be positive")

    bits = order.bit_length()
    attempts = itertools.count() if max_attempts is None else range(max_attempts)

    for _ in attempts:
        r = randbits(bits)
        if r == 0 or r >= order:
            continue

        point = curve.generator * r
        if is_infinity(point) or point.x() % order == 0:
            continue

        return r, point

    _log.error("Ephemeral sampling exhausted %d attempts on %s", max_attempts, curve.name)
    raise EntropySourceError("Random source produced no acceptable scalar")
