"""Multiple independent streams of uniform random numbers (combined MRG32k3a)."""

from __future__ import annotations

import sys
from typing import ClassVar, Iterable, Sequence, TextIO

M1 = 4294967087
M2 = 4294944443
NORM = 1.0 / (M1 + 1.0)
A12 = 1403580
A13N = 810728
A21 = 527612
A23N = 1370589
FACT = 5.9604644775390625e-8  # 1 / 2**24

_Matrix = tuple[tuple[int, int, int], ...]

# Transition matrices of the two components, raised to the powers -1, 1, 2**76, 2**127.
INV_A1: _Matrix = (
    (184888585, 0, 1945170933),
    (1, 0, 0),
    (0, 1, 0),
)
INV_A2: _Matrix = (
    (0, 360363334, 4225571728),
    (1, 0, 0),
    (0, 1, 0),
)
A1P0: _Matrix = (
    (0, 1, 0),
    (0, 0, 1),
    (-810728, 1403580, 0),
)
A2P0: _Matrix = (
    (0, 1, 0),
    (0, 0, 1),
    (-1370589, 0, 527612),
)
A1P76: _Matrix = (
    (82758667, 1871391091, 4127413238),
    (3672831523, 69195019, 1871391091),
    (3672091415, 3528743235, 69195019),
)
A2P76: _Matrix = (
    (1511326704, 3759209742, 1610795712),
    (4292754251, 1511326704, 3889917532),
    (3859662829, 4292754251, 3708466080),
)
A1P127: _Matrix = (
    (2427906178, 3580155704, 949770784),
    (226153695, 1230515664, 3580155704),
    (1988835001, 986791581, 1230515664),
)
A2P127: _Matrix = (
    (1464411153, 277697599, 1610723613),
    (32183930, 1464411153, 1022607788),
    (2824425944, 32183930, 2093834863),
)

_IDENTITY: _Matrix = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


class InvalidSeedError(ValueError):
    """Raised when a seed vector is not a legal MRG32k3a seed."""


def _mat_vec(a: _Matrix, s: Sequence[int], m: int) -> list[int]:
    return [sum(a_ij * s_j for a_ij, s_j in zip(row, s)) % m for row in a]


def _mat_mat(a: _Matrix, b: _Matrix, m: int) -> _Matrix:
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) % m for col in columns) for row in a
    )


def _mat_two_pow(a: _Matrix, m: int, e: int) -> _Matrix:
    """Return a**(2**e) mod m."""
    result = a
    for _ in range(e):
        result = _mat_mat(result, result, m)
    return result


def _mat_pow(a: _Matrix, m: int, n: int) -> _Matrix:
    """Return a**n mod m by binary decomposition of n."""
    result = _IDENTITY
    base = a
    while n > 0:
        if n % 2:
            result = _mat_mat(base, result, m)
        base = _mat_mat(base, base, m)
        n //= 2
    return result


def check_seed(seed: Iterable[int]) -> tuple[int, ...]:
    """Validate a six-component seed and return it as a tuple of ints.

    Raises InvalidSeedError when the seed is not legal.
    """
    values = tuple(int(x) for x in seed)
    if len(values) != 6:
        raise InvalidSeedError(f"Seed must have 6 components, got {len(values)}.")
    for i, value in enumerate(values):
        if value < 0:
            raise InvalidSeedError(f"Seed[{i}] is negative, Seed is not set.")
    for i in range(3):
        if values[i] >= M1:
            raise InvalidSeedError(f"Seed[{i}] >= {M1}, Seed is not set.")
    for i in range(3, 6):
        if values[i] >= M2:
            raise InvalidSeedError(f"Seed[{i}] >= {M2}, Seed is not set.")
    if not any(values[:3]):
        raise InvalidSeedError("First 3 seeds = 0.")
    if not any(values[3:]):
        raise InvalidSeedError("Last 3 seeds = 0.")
    return values


class RngStream:
    """A stream of random numbers split into substreams.

    Each new stream starts 2**127 steps after the previous one; each substream
    spans 2**76 steps.
    """

    _next_seed: ClassVar[list[int]] = [12345] * 6

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.antithetic = False
        self.increased_precision_enabled = False
        cls = type(self)
        seed = list(cls._next_seed)
        self._cg = list(seed)  # current state
        self._bg = list(seed)  # start of current substream
        self._ig = list(seed)  # start of stream
        cls._next_seed = _mat_vec(A1P127, seed[:3], M1) + _mat_vec(A2P127, seed[3:], M2)

    @classmethod
    def set_package_seed(cls, seed: Iterable[int]) -> None:
        """Set the seed used by the next stream created."""
        cls._next_seed = list(check_seed(seed))

    def reset_start_stream(self) -> None:
        """Go back to the beginning of the stream."""
        self._cg = list(self._ig)
        self._bg = list(self._ig)

    def reset_start_substream(self) -> None:
        """Go back to the beginning of the current substream."""
        self._cg = list(self._bg)

    def reset_next_substream(self) -> None:
        """Move to the beginning of the next substream."""
        self._bg = _mat_vec(A1P76, self._bg[:3], M1) + _mat_vec(A2P76, self._bg[3:], M2)
        self._cg = list(self._bg)

    def set_antithetic(self, a: bool) -> None:
        """Generate 1 - u instead of u when a is true."""
        self.antithetic = bool(a)

    def increased_precision(self, incp: bool) -> None:
        """Generate numbers with 53 bits of precision when incp is true."""
        self.increased_precision_enabled = bool(incp)

    def set_seed(self, seed: Iterable[int]) -> None:
        """Set the initial state of this stream and reset it."""
        values = list(check_seed(seed))
        self._cg = list(values)
        self._bg = list(values)
        self._ig = list(values)

    def advance_state(self, e: int, c: int) -> None:
        """Jump n steps: n = 2**e + c if e > 0, -2**(-e) + c if e < 0, c if e == 0."""
        if c >= 0:
            c1 = _mat_pow(A1P0, M1, c)
            c2 = _mat_pow(A2P0, M2, c)
        else:
            c1 = _mat_pow(INV_A1, M1, -c)
            c2 = _mat_pow(INV_A2, M2, -c)
        if e > 0:
            c1 = _mat_mat(_mat_two_pow(A1P0, M1, e), c1, M1)
            c2 = _mat_mat(_mat_two_pow(A2P0, M2, e), c2, M2)
        elif e < 0:
            c1 = _mat_mat(_mat_two_pow(INV_A1, M1, -e), c1, M1)
            c2 = _mat_mat(_mat_two_pow(INV_A2, M2, -e), c2, M2)
        self._cg = _mat_vec(c1, self._cg[:3], M1) + _mat_vec(c2, self._cg[3:], M2)

    def get_state(self) -> tuple[int, ...]:
        """Return the current state of the stream."""
        return tuple(self._cg)

    def _label(self) -> str:
        return f" {self.name}" if self.name else ""

    @staticmethod
    def _format_vector(values: Sequence[int]) -> str:
        return "{ " + ", ".join(str(v) for v in values) + " }"

    def format_state(self) -> str:
        """Describe the current state."""
        return (
            f"The current state of the Rngstream{self._label()}:\n"
            f"   Cg = {self._format_vector(self._cg)}\n\n"
        )

    def format_state_full(self) -> str:
        """Describe every part of the stream's state."""
        return (
            f"The RngStream{self._label()}:\n"
            f"   anti = {'true' if self.antithetic else 'false'}\n"
            f"   incPrec = {'true' if self.increased_precision_enabled else 'false'}\n"
            f"   Ig = {self._format_vector(self._ig)}\n"
            f"   Bg = {self._format_vector(self._bg)}\n"
            f"   Cg = {self._format_vector(self._cg)}\n\n"
        )

    def write_state(self, file: TextIO | None = None) -> None:
        """Write the current state to file (standard output by default)."""
        (file or sys.stdout).write(self.format_state())

    def write_state_full(self, file: TextIO | None = None) -> None:
        """Write the full state to file (standard output by default)."""
        (file or sys.stdout).write(self.format_state_full())

    def _u01(self) -> float:
        cg = self._cg
        p1 = (A12 * cg[1] - A13N * cg[0]) % M1
        cg[0], cg[1], cg[2] = cg[1], cg[2], p1
        p2 = (A21 * cg[5] - A23N * cg[3]) % M2
        cg[3], cg[4], cg[5] = cg[4], cg[5], p2
        diff = p1 - p2
        u = diff * NORM if p1 > p2 else (diff + M1) * NORM
        return 1 - u if self.antithetic else u

    def _u01d(self) -> float:
        u = self._u01()
        if self.antithetic:
            u += (self._u01() - 1.0) * FACT
            return u + 1.0 if u < 0.0 else u
        u += self._u01() * FACT
        return u if u < 1.0 else u - 1.0

    def rand_u01(self) -> float:
        """Return the next uniform number in (0, 1)."""
        return self._u01d() if self.increased_precision_enabled else self._u01()

    def rand_int(self, low: int, high: int) -> int:
        """Return the next uniform integer in [low, high]."""
        return low + int((high - low + 1.0) * self.rand_u01())