from __future__ import annotations

import logging
import threading
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, List, Protocol, Tuple

logger = logging.getLogger(__name__)

ChannelAuthorizer = Callable[[int], bool]
Subscriber = Callable[[str, dict], None]


class BroadcastEvent(Protocol):
    def broadcast_on(self) -> str: ...

    def broadcast_as(self) -> str: ...

    def broadcast_with(self) -> dict: ...


class Broadcaster:
    """In-process pub/sub with per-channel authorization.

    Publishing happens from worker threads, so the registry is guarded by a lock.
    A short history per channel is kept for clients that poll.
    """

    def __init__(self, *, history_size: int = 50):
        self._lock = threading.Lock()
        self._authorizers: Dict[str, ChannelAuthorizer] = {}
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._history: Dict[str, Deque[Tuple[str, dict]]] = defaultdict(lambda: deque(maxlen=history_size))

    def channel(self, name: str, authorizer: ChannelAuthorizer) -> None:
        with self._lock:
            self._authorizers[name] = authorizer

    def authorize(self, channel_name: str, user_id: int) -> bool:
        with self._lock:
            authorizer = self._authorizers.get(channel_name)
        if authorizer is None:
            return False
        return bool(authorizer(int(user_id)))

    def subscribe(self, channel_name: str, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers[channel_name].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers[channel_name]:
                    self._subscribers[channel_name].remove(callback)

        return unsubscribe

    def publish(self, event: BroadcastEvent) -> None:
        channel_name = event.broadcast_on()
        name = event.broadcast_as()
        payload = event.broadcast_with()

        with self._lock:
            self._history[channel_name].append((name, payload))
            subscribers = list(self._subscribers[channel_name])

        logger.info("Broadcasting %s on %s to %s subscriber(s)", name, channel_name, len(subscribers))
        for callback in subscribers:
            try:
                callback(name, payload)
            except Exception:
                logger.exception("Subscriber failed for %s on %s", name, channel_name)

    def recent(self, channel_name: str) -> List[dict]:
        with self._lock:
            return [{"event": name, "data": payload} for name, payload in self._history[channel_name]]
