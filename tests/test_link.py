import pytest

from lan_sim.core.errors import PacketNotPending
from lan_sim.core.link import Link
from lan_sim.core.node import Node
from lan_sim.core.packet import Packet


def test_attach_registers_with_source_only() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    assert not n1.has_link_to(n2)

    link.attach()
    assert n1.has_link_to(n2)
    assert not n2.has_link_to(n1)


def test_attach_twice_keeps_one_link() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    link.attach()
    link.attach()
    assert n1.outgoing_links == [link]


def test_emit_stages_without_delivering() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    packet = Packet(1, 2, "data")

    n1.send(packet, link)
    assert link.is_transmitting(packet)
    assert not n2.has_received(packet)

    link.transmit(packet)
    assert not link.is_transmitting(packet)
    assert n2.has_received(packet)
    assert link.packets_transmitted == 1


def test_second_transmit_fails() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    packet = Packet(1, 2, "data")
    link.emit(packet)
    link.transmit(packet)

    with pytest.raises(PacketNotPending) as excinfo:
        link.transmit(packet)
    assert excinfo.value.link is link
    assert excinfo.value.packet == packet
    assert n2.received_packets == [packet]


def test_transmit_unstaged_packet_fails() -> None:
    link = Link(Node(1), Node(2))
    with pytest.raises(PacketNotPending):
        link.transmit(Packet(1, 2, "never staged"))


def test_transmit_next_is_fifo() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    first, second = Packet(1, 2, "first"), Packet(1, 2, "second")
    link.emit(first)
    link.emit(second)

    assert link.pending_count() == 2
    assert link.transmit_next() == first
    assert link.transmit_next() == second
    assert n2.received_packets == [first, second]
    assert not link.has_pending()

    with pytest.raises(PacketNotPending):
        link.transmit_next()


def test_transmit_out_of_order() -> None:
    n1, n2 = Node(1), Node(2)
    link = Link(n1, n2)
    first, second = Packet(1, 2, "first"), Packet(1, 2, "second")
    link.emit(first)
    link.emit(second)

    link.transmit(second)
    assert link.is_transmitting(first)
    assert n2.received_packets == [second]


def test_repr() -> None:
    assert repr(Link(Node("a"), Node("b"))) == "Link(a->b)"
