"""
prng.py - Seed hash and mulberry32 generator for the recoil preview.

Both functions reproduce 32-bit wraparound integer arithmetic exactly, so
the same inputs give bit-identical trajectories on every platform.
"""

MASK_32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0


def string_hash(text: str) -> int:
    """
    Multiply-by-31 string hash (h = h * 31 + code_unit), returned unsigned.

    Characters are hashed as UTF-16 code units, so characters outside the
    BMP contribute their surrogate pair.
    """
    h = 0
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code_unit) & MASK_32
    return h


class Mulberry32:
    """
    mulberry32 pseudo-random generator.

    Example:
        >>> rng = Mulberry32(12345)
        >>> 0.0 <= rng() < 1.0
        True
    """

    def __init__(self, seed: int):
        self.state = seed & MASK_32

    def next_uint32(self) -> int:
        self.state = (self.state + MULBERRY_INCREMENT) & MASK_32
        x = self.state
        x = ((x ^ (x >> 15)) * (x | 1)) & MASK_32
        x = (x ^ ((x + ((x ^ (x >> 7)) * (x | 61))) & MASK_32)) & MASK_32
        return (x ^ (x >> 14)) & MASK_32

    def __call__(self) -> float:
        """Next float in [0, 1)."""
        return self.next_uint32() / TWO_POW_32
