#!/usr/bin/env python3
"""
Fiat-Shamir transcript demo: three chained challenges over SHA-256
"""

from curves import challenge_to_scalar
from hashes import HashID
from transcript import Transcript, PreviousChallengeNotComputed, ChallengeAlreadyComputed


def demo_transcript():
    print("=== Fiat-Shamir Transcript Demo ===")

    # Declare the challenges in protocol order
    transcript = Transcript(HashID.SHA256, "beta", "gamma", "alpha")

    # Round 1: wire commitments feed beta and gamma
    transcript.bind("beta", b"round1-commitment-a")
    transcript.bind("beta", b"round1-commitment-b")
    transcript.bind("gamma", b"public-inputs")

    for name in ("beta", "gamma"):
        digest = transcript.compute_challenge(name)
        print(f"{name:>6}: {digest.hex()}")
        print(f"        scalar (bn254) = {challenge_to_scalar(digest, 'bn254')}")

    # Round 2: permutation commitment feeds alpha
    transcript.bind("alpha", b"round2-commitment-z")
    digest = transcript.compute_challenge("alpha")
    print(f"{'alpha':>6}: {digest.hex()}")
    print(f"        scalar (bls12_381) = {challenge_to_scalar(digest, 'bls12_381')}\n")


def demo_misuse():
    print("=== Transcript Misuse Demo ===")

    transcript = Transcript("sha256", "c0", "c1")
    try:
        transcript.compute_challenge("c1")
    except PreviousChallengeNotComputed as e:
        print(f"Out of order: {e}")

    transcript.compute_challenge("c0")
    try:
        transcript.bind("c0", b"late message")
    except ChallengeAlreadyComputed as e:
        print(f"Too late: {e}\n")


if __name__ == "__main__":
    print("Running Fiat-Shamir transcript demonstrations...\n")

    demo_transcript()
    demo_misuse()

    print("Demo complete!")
