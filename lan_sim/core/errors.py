"""Exceptions raised by the LAN simulator."""

from typing import Any, Iterable


class NotFound(LookupError):
    """Raised when a network lookup finds no matching node or link.

    Attributes:
        key: The address (or address pair) that was looked up.
        searched_in: The collection that was searched.
    """

    def __init__(self, key: Any, searched_in: Iterable[Any]) -> None:
        self.key = key
        self.searched_in = searched_in
        super().__init__(f"{key!r} not found")


class PacketNotPending(ValueError):
    """Raised when a link is asked to transmit a packet it has not staged.

    Attributes:
        link: The link that was asked to transmit.
        packet: The packet that was not pending on it.
    """

    def __init__(self, link: Any, packet: Any) -> None:
        self.link = link
        self.packet = packet
        super().__init__(f"{packet!r} is not pending on {link!r}")
