"""
Video Conferencing Service
Provisions meeting/moderator URLs for appointments with the external provider
"""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import (
    APP_TIMEZONE,
    CONFERENCING_BASE_URL,
    CONFERENCING_TIMEOUT_SECONDS,
    CONFERENCING_VERIFY_TLS,
)
from ..utils.date_time import to_utc_iso

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConferenceLinks:
    meeting_url: str
    moderator_url: str

    def to_json(self) -> dict:
        """Shape stored on the appointment's call_url column"""
        return {"meetingUrl": self.meeting_url, "moderatorUrl": self.moderator_url}


class ConferencingGateway:
    """
    Client for the conferencing provider.

    provision() never raises: any transport error, non-2xx response or
    incomplete payload is logged and returned as None so the appointment
    write can continue without a call link.
    """

    def __init__(
        self,
        base_url: str = CONFERENCING_BASE_URL,
        timezone: str = APP_TIMEZONE,
        timeout: float = CONFERENCING_TIMEOUT_SECONDS,
        verify: bool = CONFERENCING_VERIFY_TLS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timezone = timezone
        self.timeout = timeout
        self.verify = verify
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, verify=self.verify, transport=self.transport)

    async def provision(self, owner: str, date: str, time: str) -> Optional[ConferenceLinks]:
        """
        Schedule a conference owned by ``owner`` at ``date`` ("YYYY-MM-DD")
        and ``time`` (24-hour "HH:MM:SS", local to the hospital).
        """
        try:
            start_time = to_utc_iso(date, time, self.timezone)
            async with self._client() as client:
                response = await client.post(
                    f"{self.base_url}/scheduleConference",
                    params={"owner": owner, "start_time": start_time},
                )

            if response.status_code not in [200, 201]:
                logger.warning(
                    f"⚠️ Conferencing provider returned HTTP {response.status_code} for {owner} at {start_time}"
                )
                return None

            payload = response.json()
            meeting_url = payload.get("meetingUrl")
            moderator_url = payload.get("moderatorUrl")
            if not meeting_url or not moderator_url:
                logger.warning(f"⚠️ Conferencing provider response missing URLs: {list(payload)}")
                return None

            logger.info(f"✅ Conference scheduled for {owner} at {start_time}")
            return ConferenceLinks(meeting_url=meeting_url, moderator_url=moderator_url)

        except Exception as e:
            logger.warning(f"⚠️ Unable to fetch meeting url from conferencing provider: {str(e)}")
            return None


def get_conferencing_gateway() -> ConferencingGateway:
    """FastAPI dependency for the conferencing gateway"""
    return ConferencingGateway()
