import logging

from hashes import new_hash

logger = logging.getLogger(__name__)


class TranscriptError(Exception):
    """Base class for transcript usage errors."""


class ChallengeNotFound(TranscriptError, KeyError):
    """The challenge name was not declared when the transcript was built."""

    def __str__(self):
        return f"challenge {self.args[0]!r} not recorded in the transcript"


class ChallengeAlreadyComputed(TranscriptError):
    """A value was bound to a challenge whose digest is already fixed."""

    def __str__(self):
        return f"challenge {self.args[0]!r} already computed, cannot be bound to other values"


class PreviousChallengeNotComputed(TranscriptError):
    """A challenge was computed before the one declared just before it."""

    def __str__(self):
        return f"challenge {self.args[0]!r} needs the previous challenge, which has not been computed"


class DuplicateChallenge(TranscriptError):
    """The same challenge name was declared twice."""

    def __str__(self):
        return f"challenge {self.args[0]!r} declared more than once"


class Challenge:
    """
    State of one named challenge inside a transcript.

    A challenge starts out declared, accumulates bound values, and becomes
    computed exactly once. After that its bindings and value are frozen.
    """

    __slots__ = ("position", "bindings", "value", "is_computed")

    def __init__(self, position):
        self.position = position
        self.bindings = []
        self.value = None
        self.is_computed = False

    def __repr__(self):
        state = "computed" if self.is_computed else f"{len(self.bindings)} bindings"
        return f"Challenge(position={self.position}, {state})"


class Transcript:
    """
    Derives Fiat-Shamir challenges from a fixed, ordered list of names.

    The prover and verifier build a transcript with the same challenge names
    in protocol order, bind the protocol messages to the challenge they must
    influence, and compute each challenge when it is needed:

        H(name || bound values...)                      for the first challenge
        H(name || previous challenge || bound values...) for every later one

    Chaining each challenge to its predecessor means the digest depends on the
    entire transcript so far, and computing challenges out of order is an error.
    """

    def __init__(self, hash_function, *challenge_names):
        """
        Build a transcript over the given challenges.

        Args:
            hash_function: Hash capability used for every challenge, or a
                HashID / hash name from which a fresh capability is created
            *challenge_names: Challenge names in protocol order

        Raises:
            DuplicateChallenge: If a name appears more than once
        """
        self.h = new_hash(hash_function)
        self.challenges = {}
        self.previous = None

        for position, name in enumerate(challenge_names):
            if name in self.challenges:
                raise DuplicateChallenge(name)
            self.challenges[name] = Challenge(position)

        logger.debug("transcript created with %d challenges: %s",
                     len(self.challenges), ", ".join(self.challenges))

    @property
    def challenge_names(self):
        """Declared challenge names, in protocol order."""
        return list(self.challenges)

    def __contains__(self, name):
        return name in self.challenges

    def __len__(self):
        return len(self.challenges)

    def is_computed(self, name):
        """
        Tell whether the named challenge has been computed.

        Raises:
            ChallengeNotFound: If the name was not declared
        """
        return self._get(name).is_computed

    def bind(self, name, value):
        """
        Bind a value to a challenge.

        A challenge can be bound to any number of values; they are hashed in
        the order they were bound. Once the challenge is computed it cannot
        be bound to anything else.

        Args:
            name: Challenge name
            value: Bytes-like value (may be empty)

        Raises:
            ChallengeNotFound: If the name was not declared
            ChallengeAlreadyComputed: If the challenge was already computed
            TypeError: If value is not bytes-like
        """
        challenge = self._get(name)
        if challenge.is_computed:
            raise ChallengeAlreadyComputed(name)
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"can only bind bytes-like values, got {type(value).__name__}")

        challenge.bindings.append(bytes(value))
        logger.debug("bound %d bytes to challenge %r", len(value), name)

    def compute_challenge(self, name):
        """
        Compute the named challenge, or return it if it was already computed.

        Args:
            name: Challenge name

        Returns:
            The challenge digest as bytes

        Raises:
            ChallengeNotFound: If the name was not declared
            PreviousChallengeNotComputed: If the challenge at the previous
                position has not been computed yet
            OSError: Whatever the hash capability raises, unchanged
        """
        challenge = self._get(name)
        if challenge.is_computed:
            return challenge.value

        previous_value = None
        if challenge.position != 0:
            if self.previous is None or self.previous.position != challenge.position - 1:
                logger.debug("challenge %r at position %d computed out of order (last computed: %s)",
                             name, challenge.position,
                             None if self.previous is None else self.previous.position)
                raise PreviousChallengeNotComputed(name)
            previous_value = self.previous.value

        self.h.reset()
        try:
            # the name acts as a domain separator
            self.h.write(name.encode())
            if previous_value is not None:
                self.h.write(previous_value)
            for value in challenge.bindings:
                self.h.write(value)
            digest = bytes(self.h.sum())
        finally:
            self.h.reset()

        challenge.value = digest
        challenge.is_computed = True
        self.previous = challenge

        logger.debug("computed challenge %r (position %d): %s...",
                     name, challenge.position, digest.hex()[:16])
        return digest

    def _get(self, name):
        try:
            return self.challenges[name]
        except KeyError:
            raise ChallengeNotFound(name) from None
