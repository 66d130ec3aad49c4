"""
Outbound SMS via the Twilio REST API.

The notifier is a plain collaborator: it sends once, never retries, and
signals any failure with SmsDeliveryError. Callers decide whether a failure
matters.
"""

from __future__ import annotations

from typing import Protocol

import httpx
import structlog

from volunteer_hub.core.config import Settings, get_settings

log = structlog.get_logger()


class SmsDeliveryError(Exception):
    """The message could not be handed to the SMS provider."""


class SmsNotifier(Protocol):
    async def send(self, to: str, body: str) -> str:
        """Send ``body`` to ``to`` and return the provider's delivery id."""
        ...


class TwilioNotifier:
    """Sends messages through Twilio's Messages resource."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        *,
        api_base: str = "https://api.twilio.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioNotifier":
        return cls(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_phone_number,
            api_base=settings.twilio_api_base,
            timeout=settings.sms_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._account_sid and self._auth_token and self._from_number)

    async def send(self, to: str, body: str) -> str:
        if not self.configured:
            raise SmsDeliveryError("SMS delivery is not configured")

        url = f"{self._api_base}/2010-04-01/Accounts/{self._account_sid}/Messages.json"
        async with httpx.AsyncClient(
            auth=(self._account_sid, self._auth_token),
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post(
                    url,
                    data={"To": to, "From": self._from_number, "Body": body},
                )
                resp.raise_for_status()
                sid = resp.json()["sid"]
            except httpx.HTTPStatusError as exc:
                raise SmsDeliveryError(
                    f"provider rejected message: HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                raise SmsDeliveryError(f"provider unreachable: {exc}") from exc
            except (KeyError, ValueError) as exc:
                raise SmsDeliveryError("provider returned an unexpected response") from exc

        log.info("sms.sent", sid=sid, to=to)
        return sid


def get_notifier() -> SmsNotifier:
    """FastAPI dependency for the SMS notifier."""
    return TwilioNotifier.from_settings(get_settings())
