import matplotlib

matplotlib.use("Agg")

import pytest

from lan_sim.core.network import Network
from lan_sim.core.node import Hub, Node


@pytest.fixture
def star():
    """Hub with mac and pc1, connected the way the tutorial does it."""
    net = Network()
    hub, mac, pc1 = Hub("hub"), Node("mac"), Node("pc1")
    net.connect(mac, hub)
    net.connect(hub, pc1)
    return net, hub, mac, pc1
