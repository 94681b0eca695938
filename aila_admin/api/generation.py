"""
Client for the external text-generation service.

The service is called with ``{"messages": [{"role", "text"}, ...], "message": text}``
and may answer with a JSON object carrying the reply under ``reply``,
``answer`` or ``text``, or with a bare JSON string. Any other outcome
(transport error, timeout, non-2xx status, unparseable body, no usable
reply) yields the configured fallback reply; `generate` never raises.
"""

import logging
from typing import Any, List, Optional

import httpx

from aila_admin.database.config.config import settings

logger = logging.getLogger(__name__)

REPLY_KEYS = ("reply", "answer", "text")


def extract_reply(data: Any) -> Optional[str]:
    """Pull the reply text out of a decoded response body, or None."""
    if isinstance(data, str):
        return data or None
    if isinstance(data, dict):
        for key in REPLY_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class GenerationClient:
    def __init__(
        self,
        url: str,
        timeout: float,
        fallback: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.fallback = fallback
        self.transport = transport

    async def generate(self, window: List[dict], message: str) -> str:
        """
        Ask the generation service for a reply.

        Parameters
        ----------
        window : list[dict]
            Trailing turns of the conversation as ``{"role", "text"}`` pairs.
        message : str
            The latest user text.

        Returns
        -------
        str
            The reply, or the fallback reply when none could be obtained.
        """
        payload = {"messages": window, "message": message}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Generation call to %s failed: %s", self.url, exc)
            return self.fallback

        if not resp.is_success:
            logger.warning("Generation service returned %s: %s", resp.status_code, resp.text[:200])
            return self.fallback

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Generation service returned a non-JSON body")
            return self.fallback

        reply = extract_reply(data)
        if reply is None:
            logger.warning("Generation service response carried no reply")
            return self.fallback
        return reply


def get_generation_client() -> GenerationClient:
    """FastAPI dependency providing the configured generation client."""
    return GenerationClient(
        url=settings.GENERATION_SERVICE_URL,
        timeout=settings.GENERATION_TIMEOUT_SECONDS,
        fallback=settings.GENERATION_FALLBACK_REPLY,
    )
