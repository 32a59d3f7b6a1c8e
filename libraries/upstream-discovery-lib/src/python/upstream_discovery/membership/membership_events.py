"""Best-effort membership change notifications.

A :class:`MembershipEvents` mailbox holds at most one pending address.
Producers never block: when the slot is taken the new event is dropped.
Consumers must therefore treat events as hints and use
:meth:`UpstreamRegistry.snapshot` as the ground truth.
"""

from __future__ import annotations

import queue

_MAILBOX_CAPACITY = 1


class MembershipEvents:
    """Bounded mailbox of upstream addresses that were added."""

    def __init__(self) -> None:
        self._mailbox: queue.Queue[str] = queue.Queue(maxsize=_MAILBOX_CAPACITY)

    def offer(self, address: str) -> bool:
        """Publish *address* without blocking.

        Returns:
            ``True`` if the event was queued, ``False`` if it was dropped.
        """
        try:
            self._mailbox.put_nowait(address)
            return True
        except queue.Full:
            return False

    def get(self, timeout: float | None = None) -> str:
        """Wait for the next address.

        Raises:
            queue.Empty: If *timeout* elapses with nothing pending.
        """
        return self._mailbox.get(timeout=timeout)

    def get_nowait(self) -> str:
        """Return the pending address or raise :class:`queue.Empty`."""
        return self._mailbox.get_nowait()


class MembershipSubscription:
    """Read-only view over a :class:`MembershipEvents` mailbox."""

    def __init__(self, events: MembershipEvents) -> None:
        self._events = events

    def get(self, timeout: float | None = None) -> str:
        return self._events.get(timeout=timeout)

    def get_nowait(self) -> str:
        return self._events.get_nowait()
