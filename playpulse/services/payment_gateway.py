"""Khalti ePayment gateway client."""

import logging
from typing import Optional

import httpx

from playpulse.errors import UpstreamError

logger = logging.getLogger(__name__)


class KhaltiGateway:
    """Thin wrapper over the Khalti ``epayment/initiate`` call.

    The gateway is treated as opaque: a successful call yields a redirect URL,
    anything else (non-2xx, timeout, transport failure, missing URL) is an
    ``UpstreamError``.
    """

    def __init__(
        self,
        base_url: str,
        secret_key: str,
        return_url: str,
        website_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.return_url = return_url
        self.website_url = website_url
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.BaseTransport] = None) -> "KhaltiGateway":
        return cls(
            base_url=settings.KHALTI_BASE_URL,
            secret_key=settings.KHALTI_SECRET_KEY,
            return_url=settings.PAYMENT_RETURN_URL,
            website_url=settings.PAYMENT_WEBSITE_URL,
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    def initiate(
        self,
        purchase_order_id: str,
        purchase_order_name: str,
        amount: float,
        customer_name: str,
        customer_email: Optional[str] = None,
    ) -> str:
        if not self.secret_key:
            raise UpstreamError("Payment gateway is not configured")

        payload = {
            "return_url": self.return_url,
            "website_url": self.website_url,
            "amount": int(round(amount * 100)),  # paisa
            "purchase_order_id": purchase_order_id,
            "purchase_order_name": purchase_order_name,
            "customer_info": {
                "name": customer_name,
                "email": customer_email or "",
            },
        }
        headers = {"Authorization": f"key {self.secret_key}"}

        try:
            response = self._client.post("epayment/initiate/", json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("[payment] gateway timeout for %s", purchase_order_id)
            raise UpstreamError("Payment gateway timed out", str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.warning("[payment] gateway transport error for %s: %s", purchase_order_id, exc)
            raise UpstreamError("Failed to initiate payment", str(exc)) from exc

        if response.status_code >= 300:
            logger.warning(
                "[payment] gateway rejected %s with %s: %s",
                purchase_order_id, response.status_code, response.text[:500],
            )
            raise UpstreamError("Failed to initiate payment", f"Gateway returned {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = {}
        payment_url = data.get("payment_url") if isinstance(data, dict) else None
        if not payment_url:
            raise UpstreamError("Failed to initiate payment", "Gateway response has no payment_url")

        logger.info("[payment] initiated %s", purchase_order_id)
        return payment_url

    def close(self) -> None:
        self._client.close()
