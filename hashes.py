import hashlib
from enum import Enum


class UnknownHashID(ValueError):
    """Raised when a hash name does not match any registered HashID."""


class HashCapability:
    """
    Interface of the hash function consumed by the transcript.

    A capability is a mutable running hash. It is owned by exactly one
    transcript at a time and is never shared between transcripts that are
    active concurrently.
    """

    digest_size = 0
    block_size = 0

    def reset(self):
        """
        Clear the internal state so the next write starts a fresh digest.
        """
        raise NotImplementedError

    def write(self, data):
        """
        Absorb bytes into the running digest.

        Args:
            data: Bytes to absorb

        Returns:
            Number of bytes absorbed

        Raises:
            OSError: If the underlying stream fails
        """
        raise NotImplementedError

    def sum(self):
        """
        Return the digest of everything written since the last reset.

        The absorbed state is left untouched; call reset() explicitly.
        """
        raise NotImplementedError


class HashlibCapability(HashCapability):
    """
    Adapts a hashlib constructor to the HashCapability interface.

    hashlib objects cannot be reset in place, so reset() builds a new one
    from the stored constructor.
    """

    def __init__(self, constructor, name=None):
        """
        Args:
            constructor: Zero-argument callable returning a hashlib object
            name: Optional display name (defaults to the hashlib name)
        """
        self._constructor = constructor
        self._h = constructor()
        self.name = name or self._h.name
        self.digest_size = self._h.digest_size
        self.block_size = self._h.block_size

    def reset(self):
        self._h = self._constructor()

    def write(self, data):
        self._h.update(data)
        return len(data)

    def sum(self):
        # digest() does not finalize the hashlib object
        return self._h.digest()

    def __repr__(self):
        return f"HashlibCapability({self.name})"


class HashID(Enum):
    """
    Closed registry of the hash constructions a transcript can be built with.

    Each member knows how to create a fresh capability and how long its
    digests are. Unknown names are reported with UnknownHashID rather than
    failing later at use.
    """

    SHA256 = "sha256"
    SHA3_256 = "sha3_256"
    BLAKE2B_256 = "blake2b_256"

    def new(self):
        """
        Create a new, independent hash capability for this construction.

        Returns:
            A HashlibCapability in a clean state
        """
        return HashlibCapability(_CONSTRUCTORS[self], name=str(self))

    @property
    def size(self):
        """Digest size in bytes."""
        return _DIGEST_SIZES[self]

    def __str__(self):
        return self.name

    @classmethod
    def from_name(cls, name):
        """
        Resolve a HashID from its canonical or value name, case-insensitively.

        Args:
            name: e.g. "SHA256", "sha256", "blake2b_256"

        Returns:
            The matching HashID

        Raises:
            UnknownHashID: If no member matches
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise UnknownHashID(f"Unknown hash ID: {name!r}")


_CONSTRUCTORS = {
    HashID.SHA256: hashlib.sha256,
    HashID.SHA3_256: hashlib.sha3_256,
    HashID.BLAKE2B_256: lambda: hashlib.blake2b(digest_size=32),
}

_DIGEST_SIZES = {
    HashID.SHA256: 32,
    HashID.SHA3_256: 32,
    HashID.BLAKE2B_256: 32,
}


def new_hash(hash_function):
    """
    Turn a hash specification into a fresh capability.

    Args:
        hash_function: A HashCapability instance (returned as is), a HashID,
            or a hash name accepted by HashID.from_name

    Returns:
        A hash capability
    """
    if isinstance(hash_function, (str, HashID)):
        return HashID.from_name(hash_function).new()
    return hash_function
