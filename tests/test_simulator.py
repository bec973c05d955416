import pytest
import simpy

from lan_sim.core.devices import Printer, Workstation
from lan_sim.core.errors import NotFound
from lan_sim.core.node import Hub, Node
from lan_sim.core.packet import Packet
from lan_sim.core.simulator import NetworkSimulator
from lan_sim.core.topologies import ring_network, star_network
from lan_sim.traffic.generators import constant_payload, constant_traffic, counter_payload


def make_simulator(network, **kwargs) -> NetworkSimulator:
    return NetworkSimulator(simpy.Environment(), network, **kwargs)


def test_step_transmits_one_hop_at_a_time(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    hello = Packet("mac", "pc1", "Hello!")
    simulator.send("mac", hello)

    assert simulator.step() == 1
    assert net.link_from("hub", "pc1").is_transmitting(hello)
    assert not pc1.has_received(hello)

    assert simulator.step() == 1
    assert pc1.has_received(hello)
    assert simulator.step() == 0


def test_step_snapshots_pending_links() -> None:
    mac, pc1, pc2 = Node("mac"), Node("pc1"), Node("pc2")
    net = star_network("hub", [mac, pc1, pc2])
    simulator = make_simulator(net)
    a, b = Packet("mac", "pc1", "a"), Packet("pc2", "pc1", "b")
    simulator.send("mac", a)
    simulator.send("pc2", b)

    assert simulator.step() == 2
    # Both packets reached the hub and now wait on its links
    assert net.link_from("hub", "pc1").pending_count() == 2
    # hub->mac, hub->pc1 and hub->pc2 each deliver their head packet
    assert simulator.step() == 3
    assert pc1.received_packets == [a]
    assert simulator.step() == 1
    assert pc1.received_packets == [a, b]
    assert simulator.step() == 0


def test_run_delivers_until_quiet(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    hello = Packet("mac", "pc1", "Hello!")
    simulator.send("mac", hello)

    metrics = simulator.run()

    assert pc1.has_received(hello)
    assert metrics["transmissions"] == 2
    assert metrics["packets_sent"] == 1
    assert metrics["packets_delivered"] == 1
    assert metrics["deliveries_by_node"] == {"mac": 0, "hub": 0, "pc1": 1}
    assert metrics["link_transmissions"] == {
        "mac->hub": 1,
        "hub->mac": 0,
        "hub->pc1": 1,
        "pc1->hub": 0,
    }
    assert metrics["pending_packets"] == 0
    assert metrics["settled"] is True
    assert simulator.env.now == pytest.approx(0.003)


def test_run_delivers_loopback(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    note = Packet("mac", "mac", "note")
    simulator.send("mac", note)

    metrics = simulator.run()
    assert mac.has_received(note)
    assert metrics["transmissions"] == 1


def test_send_from_unknown_node(star) -> None:
    simulator = make_simulator(star[0])
    with pytest.raises(NotFound):
        simulator.send("nobody", Packet("nobody", "mac", None))


def test_generator_feeds_printer() -> None:
    printer = Printer("printer", paper=2)
    net = star_network("hub", [Workstation("pc"), printer])
    simulator = make_simulator(net)
    simulator.packet_generator(
        source="pc",
        destination="printer",
        payload=counter_payload("page"),
        interval=constant_traffic(100),
        count=3,
    )

    metrics = simulator.run()

    assert metrics["packets_sent"] == 3
    assert metrics["packets_delivered"] == 3
    assert printer.tray == ["page 1", "page 2"]
    assert printer.dropped_count == 1
    assert simulator.generators == [("pc", "printer")]


def test_unbounded_generator_needs_until(star) -> None:
    simulator = make_simulator(star[0])
    simulator.packet_generator("mac", "pc1", constant_payload("x"), constant_traffic(1))
    with pytest.raises(ValueError):
        simulator.run()


def test_unbounded_generator_runs_until(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    simulator.packet_generator("mac", "pc1", constant_payload("x"), constant_traffic(1))

    metrics = simulator.run(until=3.5)

    assert metrics["packets_sent"] == 4
    assert len(pc1.received_packets) == 4
    assert simulator.env.now == pytest.approx(3.5)


def test_generator_from_unknown_node(star) -> None:
    simulator = make_simulator(star[0])
    with pytest.raises(NotFound):
        simulator.packet_generator("nobody", "mac", constant_payload(None), constant_traffic(1))


def test_cyclic_flood_hits_transmission_cap() -> None:
    hubs = [Hub(f"hub{i}") for i in range(3)]
    pc = Node("pc")
    net = ring_network(hubs)
    net.connect(pc, hubs[0])
    simulator = make_simulator(net, max_transmissions=50)
    unsettled = []
    simulator.register_hook("flood_unsettled", lambda count, now: unsettled.append(count))
    simulator.send("pc", Packet("pc", "nowhere", "lost"))

    metrics = simulator.run()

    assert metrics["settled"] is False
    assert metrics["transmissions"] == 50
    assert metrics["pending_packets"] > 0
    assert unsettled == [50]


def test_hooks(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    transmitted = []
    ended = []
    simulator.register_hook(
        "packet_transmitted", lambda link, packet, now: transmitted.append(repr(link))
    )
    simulator.register_hook("sim_end", ended.append)
    simulator.send("mac", Packet("mac", "pc1", "Hello!"))

    metrics = simulator.run()

    assert transmitted == ["Link(mac->hub)", "Link(hub->pc1)"]
    assert ended == [metrics]


def test_unknown_hook(star) -> None:
    simulator = make_simulator(star[0])
    with pytest.raises(ValueError, match="Unknown hook type"):
        simulator.register_hook("packet_lost", print)


@pytest.mark.parametrize("kwargs", [{"link_delay": 0}, {"max_transmissions": 0}])
def test_invalid_parameters(star, kwargs) -> None:
    with pytest.raises(ValueError):
        make_simulator(star[0], **kwargs)


def test_transmissions_add_up_with_loopbacks(star) -> None:
    net, hub, mac, pc1 = star
    simulator = make_simulator(net)
    simulator.send("mac", Packet("mac", "pc1", "Hello!"))
    simulator.send("pc1", Packet("pc1", "pc1", "note"))

    metrics = simulator.run()

    assert metrics["loopback_transmissions"] == {"mac": 0, "hub": 0, "pc1": 1}
    assert metrics["transmissions"] == 3
    assert metrics["transmissions"] == (
        sum(metrics["link_transmissions"].values())
        + sum(metrics["loopback_transmissions"].values())
    )
