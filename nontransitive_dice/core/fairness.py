"""
fairness.py
Implements the commit-reveal exchange that produces every contested random value of the game.
The host commits to a hidden number with a keyed hash, the counterparty contributes its own number,
then the host reveals the number and key so the counterparty can check the commitment.
Related modules:
- engine.py: Runs one exchange for the first move and one per throw.
- choices.py: InputValidationError for out of range contributions.
"""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Optional

from .choices import InputValidationError

logger = logging.getLogger(__name__)


def keyed_hash(number: int, key: bytes) -> str:
    """
    HMAC-SHA3-256 of the decimal number under the secret key, as hex.
    """
    return hmac.new(key, str(number).encode("utf-8"), hashlib.sha3_256).hexdigest()


def verify_commitment(digest: str, number: int, key: bytes) -> bool:
    """
    Recompute the keyed hash of a revealed number and compare it with the published digest.
    A False result is evidence that the host changed its number; it is never raised as an error.
    """
    return hmac.compare_digest(keyed_hash(number, key), digest)


def modular_sum(host_number: int, user_number: int, range_: int) -> int:
    """Combined result used for throws: (host + user) mod range."""
    return (host_number + user_number) % range_


def host_value(host_number: int, user_number: int, range_: int) -> int:
    """Combined result used when the contribution is a guess of the host's number."""
    return host_number


@dataclass(frozen=True)
class Reveal:
    """
    Everything disclosed when an exchange is opened.
    Fields:
        range (int): Exclusive upper bound of the numbers.
        host_number (int): The committed number.
        key (bytes): The secret key used in the commitment.
        user_number (int): The counterparty's contribution.
        result (int): Combined value in [0, range).
    """
    range: int
    host_number: int
    key: bytes
    user_number: int
    result: int

    @property
    def key_hex(self) -> str:
        return self.key.hex().upper()

    def verify(self, digest: str) -> bool:
        return verify_commitment(digest, self.host_number, self.key)


class FairExchange:
    """
    One commit-reveal round. Created by commit(), used once, then discarded.
    The host number and key stay private until reveal(), which is only allowed after contribute().
    """
    def __init__(self, range_: int, rng=None, key_bytes: int = 32,
                 combine: Callable[[int, int, int], int] = modular_sum):
        """
        Args:
            range_ (int): Exclusive upper bound of host number, contribution and result.
            rng: Source of the host number; must offer randrange(). Defaults to secrets.SystemRandom().
            key_bytes (int): Length of the secret key.
            combine: Function (host_number, user_number, range) -> result.
        """
        if range_ < 1:
            raise ValueError("range must be positive")
        self.range = range_
        self._combine = combine
        rng = rng or secrets.SystemRandom()
        # key always comes from the OS source so it cannot be predicted from a seeded rng
        self._key = secrets.token_bytes(key_bytes)
        self._host_number = rng.randrange(range_)
        self.digest = keyed_hash(self._host_number, self._key)
        self.user_number: Optional[int] = None
        self._reveal: Optional[Reveal] = None
        logger.debug("committed to a number in 0..%d (HMAC=%s)", range_ - 1, self.digest)

    @classmethod
    def commit(cls, range_: int, rng=None, key_bytes: int = 32,
               combine: Callable[[int, int, int], int] = modular_sum) -> "FairExchange":
        """Draw a fresh key and host number and publish the digest."""
        return cls(range_, rng=rng, key_bytes=key_bytes, combine=combine)

    def contribute(self, user_number: int) -> None:
        """
        Record the counterparty's number.
        Raises:
            InputValidationError: If user_number is not in [0, range).
            RuntimeError: If a contribution was already recorded.
        """
        if self.user_number is not None:
            raise RuntimeError("exchange already has a contribution")
        if isinstance(user_number, bool) or not isinstance(user_number, int) or not 0 <= user_number < self.range:
            raise InputValidationError(f"contribution must be in 0..{self.range - 1}, got {user_number!r}")
        self.user_number = user_number

    @property
    def revealed(self) -> bool:
        return self._reveal is not None

    def reveal(self) -> Reveal:
        """
        Disclose the host number and key and compute the combined result.
        Repeated calls return the same Reveal.
        Raises:
            RuntimeError: If called before contribute().
        """
        if self.user_number is None:
            raise RuntimeError("cannot reveal before the counterparty has contributed")
        if self._reveal is None:
            result = self._combine(self._host_number, self.user_number, self.range)
            self._reveal = Reveal(
                range=self.range,
                host_number=self._host_number,
                key=self._key,
                user_number=self.user_number,
                result=result,
            )
            logger.debug("revealed host number %d, key %s, result %d",
                         self._host_number, self._reveal.key_hex, result)
        return self._reveal
