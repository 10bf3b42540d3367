"""Claim passphrases built from the BIP-39 English wordlist."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from mnemonic import Mnemonic

_WORDLIST: list[str] = Mnemonic("english").wordlist
_rng = secrets.SystemRandom()


@dataclass(frozen=True)
class UpdateTipRequest:
    """The passphrase part of a tip update."""

    generate_passphrase: bool = False
    passphrase_length: int = 0


def generate_passphrase(length: int) -> str:
    """``length`` distinct random BIP-39 words joined by spaces.

    Raises ValueError if ``length`` is negative or exceeds the wordlist size.
    """
    if not 0 <= length <= len(_WORDLIST):
        raise ValueError(
            f"length must be between 0 and {len(_WORDLIST)}, got {length}"
        )
    return " ".join(_rng.sample(_WORDLIST, length))


def get_updated_passphrase(
    existing_passphrase: str | None,
    request: UpdateTipRequest,
) -> str | None:
    """Passphrase to store after an update.

    Keeps the existing passphrase when it already has the requested number
    of words, so re-saving a tip does not invalidate printed cards.
    """
    if not request.generate_passphrase:
        return None
    if (
        existing_passphrase is not None
        and len(existing_passphrase.split(" ")) == request.passphrase_length
    ):
        return existing_passphrase
    return generate_passphrase(request.passphrase_length)
