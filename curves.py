"""
Curve identifiers and the mapping from challenge digests to scalars.

Proof systems built on the transcript consume challenges as elements of a
curve's scalar field. Only the field moduli are needed here; they are taken
from py_ecc so they always match the curve arithmetic used elsewhere.
"""

from enum import Enum

from py_ecc import optimized_bls12_381, optimized_bn128


class UnsupportedCurve(ValueError):
    """Raised when a curve name does not match any CurveID."""


class CurveID(Enum):
    """
    Closed set of pairing-friendly curves the transcript can produce scalars for.
    """

    BN254 = "bn254"
    BLS12_381 = "bls12_381"

    def scalar_field(self):
        """
        Order of the curve's scalar field (the group order r).

        Returns:
            int
        """
        return _BACKENDS[self].curve_order

    def base_field(self):
        """
        Modulus of the field the curve is defined over (p).

        Returns:
            int
        """
        return _BACKENDS[self].field_modulus

    def __str__(self):
        return self.value

    @classmethod
    def from_name(cls, name):
        """
        Resolve a curve name such as "bn254" or "BLS12-381".

        Args:
            name: Curve name or CurveID

        Returns:
            The matching CurveID

        Raises:
            UnsupportedCurve: If no member matches
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        # py_ecc calls BN254 "bn128"
        if key == "bn128":
            key = "bn254"
        for member in cls:
            if key == member.value:
                return member
        raise UnsupportedCurve(f"Unsupported curve type: {name}")


_BACKENDS = {
    CurveID.BN254: optimized_bn128,
    CurveID.BLS12_381: optimized_bls12_381,
}


def implemented():
    """List of the curves with a scalar field available."""
    return list(CurveID)


def challenge_to_scalar(digest, curve="bn254"):
    """
    Convert a challenge digest to a scalar field element.

    The digest is read as a big-endian integer and reduced modulo the
    scalar field order.

    Args:
        digest: Challenge bytes, as returned by Transcript.compute_challenge
        curve: CurveID or curve name

    Returns:
        int in [0, r)
    """
    r = CurveID.from_name(curve).scalar_field()
    return int.from_bytes(digest, byteorder="big") % r
