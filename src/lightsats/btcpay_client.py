"""BTCPay Server (Greenfield API v1) client used to fund and withdraw tips.

Tippers pay a SATS invoice for ``amount + fee``; tippees are paid out over
Lightning from the same store. Rates for fiat quotes come from the store's
rate provider.
"""

from __future__ import annotations

from typing import Any

import httpx

from lightsats.constants import SATS_PER_BTC


class BTCPayError(Exception):
    """Any failure talking to the tip store. ``status_code`` is None off the wire."""

    retryable = False

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BTCPayAuthError(BTCPayError):
    """API key rejected, or missing a store permission (401/403)."""


class BTCPayNotFoundError(BTCPayError):
    """Unknown store, invoice or payout (404)."""


class BTCPayValidationError(BTCPayError):
    """Store refused the payload, e.g. a bad Lightning destination (422)."""


class BTCPayServerError(BTCPayError):
    retryable = True


class BTCPayConnectionError(BTCPayError):
    retryable = True


class BTCPayTimeoutError(BTCPayError):
    retryable = True


class BTCPayRateError(BTCPayError):
    """Store returned no usable rate for the requested currency pair."""


# A tip withdrawal above 1 BTC means sats were mistaken for BTC somewhere.
MAX_PAYOUT_SATS = SATS_PER_BTC


def sats_to_btc_string(sats: int, *, max_sats: int = MAX_PAYOUT_SATS) -> str:
    """Format a payout amount as the 8-decimal BTC string BTCPay expects.

    Raises ValueError on negative values or values exceeding *max_sats*.
    """
    if sats < 0:
        raise ValueError(f"sats must be non-negative, got {sats}")
    if sats > max_sats:
        raise ValueError(f"sats ({sats:,}) exceeds ceiling ({max_sats:,})")
    whole, frac = divmod(sats, SATS_PER_BTC)
    return f"{whole}.{frac:08d}"


_ERRORS_BY_STATUS: dict[int, type[BTCPayError]] = {
    401: BTCPayAuthError,
    403: BTCPayAuthError,
    404: BTCPayNotFoundError,
    422: BTCPayValidationError,
}


def _error_for(response: httpx.Response) -> BTCPayError:
    status = response.status_code
    exc_cls = _ERRORS_BY_STATUS.get(status)
    if exc_cls is None:
        exc_cls = BTCPayServerError if status >= 500 else BTCPayError
    return exc_cls(response.text, status_code=status)


class BTCPayClient:
    """One store's view of BTCPay: tip invoices, tip payouts, BTC rates.

    Host, key and store id are passed in by the caller. Auth uses BTCPay's
    ``token`` scheme rather than Bearer.
    """

    def __init__(self, host: str, api_key: str, store_id: str) -> None:
        self._store_id = store_id
        self._client = httpx.AsyncClient(
            base_url=host.rstrip("/") + "/api/v1",
            headers={"Authorization": f"token {api_key}"},
            timeout=httpx.Timeout(connect=5.0, read=15.0, write=10.0, pool=5.0),
        )

    @property
    def _store_path(self) -> str:
        return f"/stores/{self._store_id}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {"json": json_data}
        if params is not None:
            kwargs["params"] = params
        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.ConnectError as exc:
            raise BTCPayConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise BTCPayTimeoutError(str(exc)) from exc

        if response.status_code >= 400:
            raise _error_for(response)
        return response.json()

    # -- diagnostics ----------------------------------------------------------

    async def health_check(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    async def get_store(self) -> dict[str, Any]:
        return await self._request("GET", self._store_path)

    async def get_api_key_info(self) -> dict[str, Any]:
        """Permissions of the configured key (invoice + payout rights are needed)."""
        return await self._request("GET", "/api-keys/current")

    # -- funding --------------------------------------------------------------

    async def create_invoice(
        self,
        amount_sats: int,
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Invoice the tipper for ``amount_sats`` (tip plus fee), priced in SATS."""
        payload: dict[str, Any] = {"amount": str(amount_sats), "currency": "SATS"}
        if metadata is not None:
            payload["metadata"] = metadata
        return await self._request("POST", f"{self._store_path}/invoices", json_data=payload)

    async def get_invoice(self, invoice_id: str) -> dict[str, Any]:
        return await self._request("GET", f"{self._store_path}/invoices/{invoice_id}")

    async def get_exchange_rate(self, currency: str) -> float:
        """Price of 1 BTC in ``currency`` from the store's rate source.

        Raises BTCPayRateError if the store has no rate for the pair.
        """
        pair = f"BTC_{currency.upper()}"
        rates = await self._request(
            "GET", f"{self._store_path}/rates",
            params={"currencyPair": pair},
        )
        for entry in rates or []:
            if entry.get("currencyPair") != pair:
                continue
            if entry.get("errors") or not entry.get("rate"):
                raise BTCPayRateError(
                    f"No rate for {pair}: {', '.join(entry.get('errors') or ['empty'])}"
                )
            return float(entry["rate"])
        raise BTCPayRateError(f"No rate for {pair}")

    # -- withdrawal -----------------------------------------------------------

    async def create_payout(
        self,
        destination: str,
        amount_sats: int,
        payout_method: str = "BTC-LN",
    ) -> dict[str, Any]:
        """Pay ``amount_sats`` of withdrawn tips to a Lightning destination.

        Raises ValueError before any request when the amount is above 1 BTC.
        """
        payload: dict[str, Any] = {
            "destination": destination,
            "amount": sats_to_btc_string(amount_sats),
            "payoutMethodId": payout_method,
        }
        return await self._request("POST", f"{self._store_path}/payouts", json_data=payload)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BTCPayClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
