from typing import Iterator

import pytest
from ecdsa.ellipticcurve import CurveFp, Point

from ecvault.core.config import SecureConfig
from ecvault.core.crypto.curves import SECP256R1, CurveParams
from ecvault.core.crypto.key_agreement import ECKeyPair

# y^2 = x^3 + 2x + 2 over F_17, G = (5, 1) of prime order 19.
# 7G = (0, 6) and 12G = (0, 11) have x == 0.
_TOY_FP = CurveFp(17, 2, 2, 1)
TOY_CURVE = CurveParams(
    name="toy17",
    curve=_TOY_FP,
    generator=Point(_TOY_FP, 5, 1, 19),
    order=19,
)

TEST_PRIVATE_KEY = bytes.fromhex(
    "c7134d6fd8e73d819e82755c64c93788d8db0961929e025a53363c4cc02a6962"
)
OTHER_PRIVATE_KEY = bytes.fromhex(
    "0f1e2d3c4b5a69788796a5b4c3d2e1f00112233445566778899aabbccddeeff0"
)


@pytest.fixture(autouse=True)
def _reset_config() -> Iterator[None]:
    SecureConfig.reset_instance()
    yield
    SecureConfig.reset_instance()


@pytest.fixture
def toy_curve() -> CurveParams:
    return TOY_CURVE


@pytest.fixture
def key_pair() -> ECKeyPair:
    return ECKeyPair.from_private_key(TEST_PRIVATE_KEY, SECP256R1)


@pytest.fixture
def other_key_pair() -> ECKeyPair:
    return ECKeyPair.from_private_key(OTHER_PRIVATE_KEY, SECP256R1)


class ScriptedBits:
    """Deterministic stand-in for secrets.randbits that replays values."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.requested: list[int] = []

    def __call__(self, bits: int) -> int:
        self.requested.append(bits)
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture
def scripted_bits() -> type[ScriptedBits]:
    return ScriptedBits
