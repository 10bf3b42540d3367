"""Public URLs for tips, claims and profiles."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from lightsats.constants import PageRoutes
from lightsats.tips import Tip

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _base(app_url: str) -> str:
    return app_url.rstrip("/")


def get_tip_url(tip: Tip, app_url: str) -> str:
    return f"{_base(app_url)}{PageRoutes.TIPS}/{tip.id}"


def get_claim_url(
    tip: Tip,
    app_url: str,
    is_printed: bool = False,
    nwc_connection_string: str | None = None,
) -> str:
    """Claim page URL for a tip.

    The NWC connection string is URI-component encoded before being added
    as a query parameter, so it arrives double-encoded in the final URL.
    """
    url = f"{get_tip_url(tip, app_url)}/claim"
    params: list[tuple[str, str]] = []
    if is_printed:
        params.append(("printed", "true"))
    if nwc_connection_string:
        params.append(("secret", quote(nwc_connection_string, safe=_URI_COMPONENT_SAFE)))
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def get_redeem_url(app_url: str, exclude_http: bool = False) -> str:
    """Short redeem URL printed on gift cards, optionally without its scheme."""
    redeem_url = f"{_base(app_url)}{PageRoutes.REDEEM}"
    if exclude_http and "//" in redeem_url:
        return redeem_url[redeem_url.index("//") + 2:]
    return redeem_url


def get_public_profile_url(user_id: str, app_url: str) -> str:
    return f"{_base(app_url)}{PageRoutes.USERS}/{user_id}"
