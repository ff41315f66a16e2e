"""Synchronous HTTP ValueTransport backed by BTCPay Server's payout API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from membercard.config import MembershipCardConfig
from membercard.constants import MAX_PAYOUT_SATS
from membercard.errors import TransferFailure
from membercard.transport import Transfer

logger = logging.getLogger(__name__)


class PayoutError(Exception):
    """Any failed payout API call. ``status_code`` is None for transport errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PayoutAuthError(PayoutError):
    """401/403 — the API key cannot act on this store."""


class PayoutConnectionError(PayoutError):
    """The request never produced a usable response (network, timeout, protocol)."""


def sats_to_btc_string(sats: int, *, max_sats: int = MAX_PAYOUT_SATS) -> str:
    """Format sats as the 8-decimal BTC amount the payout API expects.

    Raises ValueError on negative values or values exceeding *max_sats*.
    """
    if sats < 0:
        raise ValueError(f"sats must be non-negative, got {sats}")
    if sats > max_sats:
        raise ValueError(f"sats ({sats:,}) exceeds ceiling ({max_sats:,})")
    return f"{sats / 100_000_000:.8f}"


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class PayoutClient:
    """ValueTransport that pays fee receivers and refunds through store payouts.

    Each transfer in a batch becomes one payout. If any payout cannot be
    created, the ones already created for that batch are cancelled before
    TransferFailure is raised. Amounts are native-currency sats.
    """

    def __init__(
        self,
        host: str,
        api_key: str,
        store_id: str,
        payout_method: str = "BTC-LN",
        max_payout_sats: int = MAX_PAYOUT_SATS,
    ) -> None:
        base_url = host.rstrip("/") + "/api/v1"
        self._store_id = store_id
        self._payout_method = payout_method
        self._max_payout_sats = max_payout_sats
        self._client = httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"token {api_key}"},
            timeout=httpx.Timeout(connect=5.0, read=15.0, write=10.0, pool=5.0),
        )

    @classmethod
    def from_config(cls, config: MembershipCardConfig) -> PayoutClient | None:
        """Build a client from config, or None if any connection setting is missing."""
        if not (config.payout_host and config.payout_api_key and config.payout_store_id):
            return None
        return cls(
            config.payout_host,
            config.payout_api_key,
            config.payout_store_id,
            payout_method=config.payout_method,
        )

    # -- internal request dispatcher -----------------------------------------

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request; every failure surfaces as a PayoutError."""
        try:
            response = self._client.request(method, endpoint, json=json_data)
        except httpx.HTTPError as exc:
            raise PayoutConnectionError(f"{type(exc).__name__}: {exc}") from exc

        if response.status_code in (401, 403):
            raise PayoutAuthError(response.text, status_code=response.status_code)
        if response.status_code >= 400:
            raise PayoutError(response.text, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PayoutError(
                f"Unparseable response body: {exc}", status_code=response.status_code,
            ) from exc

    # -- public API methods ---------------------------------------------------

    def health_check(self) -> dict[str, Any]:
        """GET /health — server health status."""
        return self._request("GET", "/health")

    def create_payout(self, destination: str, amount_sats: int) -> str:
        """POST /stores/{storeId}/payouts — create a store payout, returning its id."""
        amount_btc = sats_to_btc_string(amount_sats, max_sats=self._max_payout_sats)
        payload: dict[str, Any] = {
            "destination": destination,
            "amount": amount_btc,
            "payoutMethodId": self._payout_method,
        }
        payout = self._request(
            "POST", f"/stores/{self._store_id}/payouts", json_data=payload
        )
        payout_id = payout.get("id") if isinstance(payout, dict) else None
        if not payout_id:
            raise PayoutError(f"Payout response carries no id: {payout!r}")
        return str(payout_id)

    def cancel_payout(self, payout_id: str) -> None:
        """DELETE /stores/{storeId}/payouts/{payoutId} — cancel a pending payout."""
        self._request("DELETE", f"/stores/{self._store_id}/payouts/{payout_id}")

    # -- ValueTransport -------------------------------------------------------

    def send(self, transfers: Sequence[Transfer]) -> None:
        created: list[str] = []
        for transfer in transfers:
            try:
                created.append(self.create_payout(transfer.recipient, transfer.amount))
            except (PayoutError, ValueError) as e:
                logger.warning(
                    "Payout of %d sats to %s failed: %s",
                    transfer.amount, transfer.recipient, e,
                )
                self._cancel_all(created)
                raise TransferFailure(transfer.recipient, transfer.amount, str(e)) from e

    def _cancel_all(self, payout_ids: list[str]) -> None:
        for payout_id in payout_ids:
            try:
                self.cancel_payout(payout_id)
            except PayoutError as e:
                logger.error(
                    "CRITICAL: payout %s could not be cancelled after a failed "
                    "batch: %s",
                    payout_id, e,
                )

    # -- lifecycle ------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> PayoutClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
