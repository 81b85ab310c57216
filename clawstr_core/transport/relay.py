"""Single-relay query over a WebSocket (NIP-01)."""

import json
import uuid
from typing import Sequence

from websockets.asyncio.client import connect
from websockets.exceptions import WebSocketException

from ..errors import RelayClosedError, TransportError
from ..logging_config import get_logger
from ..models import NostrEvent, NostrFilter

logger = get_logger(__name__)


class NostrRelay:
    """Queries one relay. Opens a connection per query."""

    def __init__(self, url: str, open_timeout: float = 10.0):
        self._url = url
        self._open_timeout = open_timeout

    @property
    def url(self) -> str:
        return self._url

    def relay(self, url: str) -> "NostrRelay":
        """Client bound to another relay."""
        if url == self._url:
            return self
        return NostrRelay(url, open_timeout=self._open_timeout)

    async def query(self, filters: Sequence[NostrFilter]) -> list[NostrEvent]:
        """Send REQ and collect events until EOSE, in relay order."""
        sub_id = uuid.uuid4().hex[:16]
        request = ["REQ", sub_id, *(f.to_dict() for f in filters)]
        logger.debug("REQ %s -> %s: %s", sub_id, self._url, request[2:])

        try:
            async with connect(self._url, open_timeout=self._open_timeout) as ws:
                await ws.send(json.dumps(request))
                events = await self._collect(ws, sub_id)
                await ws.send(json.dumps(["CLOSE", sub_id]))
        except (OSError, WebSocketException) as e:
            raise TransportError(f"Relay {self._url} failed: {e}") from e

        logger.debug("EOSE %s <- %s: %d events", sub_id, self._url, len(events))
        return events

    async def _collect(self, ws, sub_id: str) -> list[NostrEvent]:
        events: list[NostrEvent] = []
        async for raw in ws:
            try:
                message = json.loads(raw)
            except ValueError:
                logger.warning("Non-JSON frame from %s", self._url)
                continue

            if not isinstance(message, list) or not message:
                continue

            verb = message[0]
            if verb == "EVENT" and len(message) >= 3 and message[1] == sub_id:
                try:
                    events.append(NostrEvent.from_dict(message[2]))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(
                        "Dropping malformed event from %s: %s",
                        self._url,
                        e,
                        extra={"relay": self._url},
                    )
            elif verb == "EOSE" and len(message) >= 2 and message[1] == sub_id:
                return events
            elif verb == "CLOSED" and len(message) >= 2 and message[1] == sub_id:
                reason = message[2] if len(message) > 2 else ""
                raise RelayClosedError(self._url, reason)
            elif verb == "NOTICE":
                logger.warning(
                    "NOTICE from %s: %s", self._url, message[1:], extra={"relay": self._url}
                )

        raise TransportError(f"Relay {self._url} disconnected before EOSE")
