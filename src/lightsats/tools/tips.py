"""Tip tools: quote_tip, create_tip_invoice, check_tip_funding, withdraw_tips, btcpay_status."""

from __future__ import annotations

import importlib.metadata
import logging
import platform
from collections.abc import Sequence
from typing import Any

from lightsats.btcpay_client import BTCPayAuthError, BTCPayClient, BTCPayError
from lightsats.config import LightsatsConfig
from lightsats.constants import WITHDRAWABLE_TIP_STATUSES
from lightsats.currency import get_fiat_amount, get_sats_amount, round_fiat
from lightsats.fees import fee_breakdown
from lightsats.tips import Tip, limit_tips, total_amount

logger = logging.getLogger(__name__)


def _validate_tip_amount(amount_sats: int, config: LightsatsConfig) -> str | None:
    """Return an error message for an unacceptable tip amount, else None."""
    if amount_sats <= 0:
        return "amount_sats must be positive."
    if amount_sats > config.max_tip_sats:
        return f"amount_sats exceeds maximum of {config.max_tip_sats:,} sats per tip."
    return None


async def quote_tip_tool(
    btcpay: BTCPayClient,
    config: LightsatsConfig,
    fiat_amount: float,
    currency: str | None = None,
) -> dict[str, Any]:
    """Price a fiat tip in sats, including the funding fee.

    Uses the store's current BTC rate. The tipper pays ``total_sats``; the
    tippee can later withdraw ``amount_sats``.

    Returns dict with:
        success: True when a rate was found and the amount is acceptable.
        currency/exchange_rate: Rate used (fiat per BTC).
        amount_sats/fee_sats/total_sats: Tip, fee and what the tipper pays.
        fiat_amount/fiat_total: Fiat strings (2 decimals) for display.

    Errors: success=False if the rate lookup fails or the amount is not
    positive or above the per-tip cap.
    """
    currency = (currency or config.default_currency).upper()
    if fiat_amount <= 0:
        return {"success": False, "error": "fiat_amount must be positive."}

    try:
        rate = await btcpay.get_exchange_rate(currency)
    except BTCPayError as e:
        return {"success": False, "error": f"BTCPay error: {e}"}

    amount_sats = get_sats_amount(fiat_amount, rate)
    error = _validate_tip_amount(amount_sats, config)
    if error:
        return {"success": False, "error": error, "amount_sats": amount_sats}

    breakdown = fee_breakdown(amount_sats, config)
    return {
        "success": True,
        "currency": currency,
        "exchange_rate": rate,
        **breakdown,
        "fiat_amount": round_fiat(fiat_amount),
        "fiat_total": round_fiat(get_fiat_amount(breakdown["total_sats"], rate)),
    }


async def create_tip_invoice_tool(
    btcpay: BTCPayClient,
    config: LightsatsConfig,
    tip_id: str,
    amount_sats: int,
) -> dict[str, Any]:
    """Create a BTCPay invoice funding a tip of ``amount_sats`` plus its fee."""
    error = _validate_tip_amount(amount_sats, config)
    if error:
        return {"success": False, "error": error}

    breakdown = fee_breakdown(amount_sats, config)
    try:
        invoice = await btcpay.create_invoice(
            breakdown["total_sats"],
            metadata={
                "tip_id": tip_id,
                "purpose": "tip_funding",
                "fee_sats": breakdown["fee_sats"],
            },
        )
    except BTCPayError as e:
        return {"success": False, "error": f"BTCPay error: {e}"}

    invoice_id = invoice.get("id", "")
    checkout_link = invoice.get("checkoutLink", "")
    expiry = invoice.get("expirationTime", "")

    return {
        "success": True,
        "tip_id": tip_id,
        "invoice_id": invoice_id,
        **breakdown,
        "checkout_link": checkout_link,
        "expiration": expiry,
        "message": (
            f"Invoice created for {breakdown['total_sats']:,} sats "
            f"({amount_sats:,} tip + {breakdown['fee_sats']:,} fee).\n\n"
            f"Pay here: {checkout_link}\n"
            f"Expires: {expiry}"
        ),
    }


async def check_tip_funding_tool(
    btcpay: BTCPayClient,
    tip_id: str,
    invoice_id: str,
) -> dict[str, Any]:
    """Poll a tip's funding invoice.

    Invoice lifecycle: New → Processing → Settled (tip funded) or
    Expired/Invalid (tip stays unfunded). Safe to call repeatedly.
    """
    try:
        invoice = await btcpay.get_invoice(invoice_id)
    except BTCPayError as e:
        return {"success": False, "error": f"BTCPay error: {e}"}

    status = invoice.get("status", "Unknown")
    result: dict[str, Any] = {
        "success": True,
        "tip_id": tip_id,
        "invoice_id": invoice_id,
        "status": status,
        "funded": False,
    }
    additional = invoice.get("additionalStatus", "")
    if additional:
        result["additional_status"] = additional

    if status == "New":
        result["message"] = "Invoice created, awaiting payment."
    elif status == "Processing":
        result["message"] = "Payment seen, waiting for confirmation."
    elif status == "Settled":
        result["funded"] = True
        result["amount_sats"] = int(float(invoice.get("amount", "0")))
        result["message"] = "Tip funded."
    elif status == "Expired":
        result["message"] = "Invoice expired. Create a new one to fund the tip."
    elif status == "Invalid":
        result["message"] = "Payment invalid."
    else:
        result["message"] = f"Unknown invoice status: {status}"

    return result


async def withdraw_tips_tool(
    btcpay: BTCPayClient,
    config: LightsatsConfig,
    tips: Sequence[Tip],
    destination: str,
) -> dict[str, Any]:
    """Pay claimed tips out to a Lightning destination in one payout.

    Only tips in a withdrawable status are considered. ``limit_tips`` caps
    how many (and how many sats) go out at once; the rest stay claimed for
    a later withdrawal.

    Args:
        btcpay: BTCPay client for the store holding tip funds.
        config: Withdrawal caps.
        tips: The tippee's tips (any status).
        destination: Lightning Address, LNURL or BOLT11 invoice.

    Returns dict with:
        success: True when the payout was created.
        payout_id/payout_state: BTCPay payout reference.
        amount_sats: Total paid out.
        withdrawn_tip_ids: Tips included; the caller marks them WITHDRAWING.
        remaining_tip_count: Withdrawable tips left for a later withdrawal.
        message: e.g. "2,100 sats have been withdrawn!"
    """
    if not destination:
        return {"success": False, "error": "A withdrawal destination is required."}

    withdrawable = [tip for tip in tips if tip.status in WITHDRAWABLE_TIP_STATUSES]
    if not withdrawable:
        return {"success": False, "error": "No claimed tips to withdraw."}

    selected = limit_tips(withdrawable, config)
    if not selected:
        return {
            "success": False,
            "error": (
                f"Every claimed tip exceeds the withdrawal cap of "
                f"{config.max_tip_sats:,} sats."
            ),
        }

    amount_sats = total_amount(selected)
    try:
        payout = await btcpay.create_payout(destination, amount_sats)
    except BTCPayError as e:
        logger.warning("Withdrawal of %d sats failed: %s", amount_sats, e)
        return {"success": False, "error": f"BTCPay error: {e}"}
    except ValueError as e:
        logger.error("Withdrawal of %d sats refused: %s", amount_sats, e)
        return {"success": False, "error": f"Payout refused: {e}"}

    logger.info(
        "Withdrew %d sats for %d / %d tips.",
        amount_sats, len(selected), len(withdrawable),
    )
    return {
        "success": True,
        "payout_id": payout.get("id", ""),
        "payout_state": payout.get("state", "Unknown"),
        "amount_sats": amount_sats,
        "withdrawn_tip_ids": [tip.id for tip in selected],
        "remaining_tip_count": len(withdrawable) - len(selected),
        "message": f"{amount_sats:,} sats have been withdrawn!",
    }


async def btcpay_status_tool(
    config: LightsatsConfig,
    btcpay: BTCPayClient | None,
) -> dict[str, Any]:
    """Report BTCPay configuration, connectivity and permissions for diagnostics.

    Checks whether BTCPay is reachable, the store exists, and the API key can
    create invoices, view invoices and create payouts (needed for withdrawals).
    """
    result: dict[str, Any] = {
        "btcpay_host": config.btcpay_host or None,
        "btcpay_store_id": config.btcpay_store_id or None,
        "btcpay_api_key_status": "present" if config.btcpay_api_key else "missing",
        "fee_config": {
            "minimum_fee_sats": config.minimum_fee_sats,
            "fee_percent": config.fee_percent,
        },
        "withdrawal_limits": {
            "max_tip_sats": config.max_tip_sats,
            "max_tips_withdrawable": config.max_tips_withdrawable,
        },
    }

    versions: dict[str, str] = {"python": platform.python_version()}
    for pkg in ("lightsats", "httpx"):
        try:
            versions[pkg] = importlib.metadata.version(pkg)
        except importlib.metadata.PackageNotFoundError:
            versions[pkg] = "unknown"
    result["versions"] = versions

    connection_vars_present = bool(
        config.btcpay_host and config.btcpay_store_id and config.btcpay_api_key
    )
    if not connection_vars_present or btcpay is None:
        result["server_reachable"] = None
        result["store_name"] = None
        return result

    try:
        await btcpay.health_check()
        result["server_reachable"] = True
    except BTCPayError:
        result["server_reachable"] = False

    try:
        store = await btcpay.get_store()
        result["store_name"] = store.get("name", "unknown")
    except BTCPayAuthError:
        result["store_name"] = "unauthorized"
    except BTCPayError:
        result["store_name"] = None

    try:
        key_info = await btcpay.get_api_key_info()
        permissions = key_info.get("permissions", [])
        required = [
            "btcpay.store.cancreateinvoice",
            "btcpay.store.canviewinvoices",
            "btcpay.store.cancreatenonapprovedpullpayments",
        ]
        result["api_key_permissions"] = {
            "permissions": permissions,
            "required": required,
            "present": [p for p in required if p in permissions],
            "missing": [p for p in required if p not in permissions],
        }
    except BTCPayError as e:
        result["api_key_permissions"] = {"error": str(e)}

    return result
