import dataclasses

import pytest

from ecvault.core.crypto.curves import SECP256K1, SECP256R1, CurveParams
from ecvault.core.crypto.sampler import sample_ephemeral
from ecvault.core.exceptions import EntropySourceError, InvalidArgumentError


@pytest.mark.parametrize("curve", [SECP256R1, SECP256K1], ids=lambda c: c.name)
def test_sample_on_real_curves(curve: CurveParams) -> None:
    r, point = sample_ephemeral(curve)
    assert 0 < r < curve.order
    assert point == curve.generator * r
    assert point.x() % curve.order != 0


def test_samples_are_fresh() -> None:
    first, _ = sample_ephemeral(SECP256R1)
    second, _ = sample_ephemeral(SECP256R1)
    assert first != second


def test_rejects_degenerate_x_and_redraws(toy_curve: CurveParams, scripted_bits) -> None:
    # 0 is zero, 25 >= N, 7G has x == 0; 3 is the first acceptable draw
    bits = scripted_bits(0, 25, 7, 3)
    r, point = sample_ephemeral(toy_curve, randbits=bits)

    assert r == 3
    assert point == toy_curve.generator * 3
    assert bits.remaining == 0
    assert bits.requested == [5, 5, 5, 5]


@pytest.mark.parametrize("degenerate", [7, 12])
def test_never_returns_scalar_with_zero_x(toy_curve: CurveParams, scripted_bits, degenerate: int) -> None:
    assert (toy_curve.generator * degenerate).x() == 0

    bits = scripted_bits(degenerate, degenerate, 18)
    r, point = sample_ephemeral(toy_curve, randbits=bits)

    assert r == 18
    assert point.x() % toy_curve.order != 0


def test_every_toy_scalar_accepted_or_rejected_correctly(toy_curve: CurveParams, scripted_bits) -> None:
    for candidate in range(1, toy_curve.order):
        bits = scripted_bits(candidate, 1)
        r, _ = sample_ephemeral(toy_curve, randbits=bits)
        if (toy_curve.generator * candidate).x() == 0:
            assert r == 1
        else:
            assert r == candidate


def test_fuse_trips_on_broken_source(toy_curve: CurveParams) -> None:
    with pytest.raises(EntropySourceError):
        sample_ephemeral(toy_curve, max_attempts=50, randbits=lambda bits: 0)


def test_unbounded_mode_keeps_drawing(toy_curve: CurveParams, scripted_bits) -> None:
    bits = scripted_bits(*([0] * 2000), 4)
    r, _ = sample_ephemeral(toy_curve, max_attempts=None, randbits=bits)
    assert r == 4


@pytest.mark.parametrize("order", [0, -19, 19.0, True])
def test_rejects_invalid_order(toy_curve: CurveParams, order: object) -> None:
    broken = dataclasses.replace(toy_curve, order=order)
    with pytest.raises(InvalidArgumentError):
        sample_ephemeral(broken)


def test_rejects_nonpositive_attempts(toy_curve: CurveParams) -> None:
    with pytest.raises(InvalidArgumentError):
        sample_ephemeral(toy_curve, max_attempts=0)
