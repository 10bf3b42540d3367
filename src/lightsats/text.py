"""Small string helpers: ordinals, truncation, codes, NWC URL checks."""

from __future__ import annotations

import secrets
import string

_ALPHANUMERIC = string.digits + string.ascii_uppercase
_NWC_PREFIXES = ("nostrwalletconnect://", "nostr+walletconnect://")


def nth(n: int) -> str:
    """English ordinal suffix for ``n`` (1 -> "st", 12 -> "th", 23 -> "rd")."""
    if 11 <= n % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def truncate(text: str, length: int, suffix: str = "...") -> str:
    if len(text) > length:
        return text[:length] + suffix
    return text


def generate_alphanumeric(length: int) -> str:
    """Random uppercase ``[0-9A-Z]`` code, e.g. for printed claim codes."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def is_valid_nostr_connect_url(url: str) -> bool:
    """Nostr Wallet Connect URL with an embedded ``secret`` parameter."""
    return url.startswith(_NWC_PREFIXES) and url.find("&secret=") > 0
