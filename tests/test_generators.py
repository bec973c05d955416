import numpy as np
import pytest

from lan_sim.traffic.generators import (
    constant_payload,
    constant_traffic,
    counter_payload,
    poisson_traffic,
    variable_traffic,
)


def test_constant_traffic() -> None:
    interval = constant_traffic(4)
    assert interval() == 0.25
    assert interval() == 0.25


def test_variable_traffic_stays_in_range() -> None:
    interval = variable_traffic(2, 10)
    for _ in range(100):
        assert 0.1 <= interval() <= 0.5


def test_poisson_traffic_is_positive() -> None:
    np.random.seed(42)
    interval = poisson_traffic(100)
    samples = [interval() for _ in range(1000)]
    assert all(s >= 0 for s in samples)
    assert np.mean(samples) == pytest.approx(0.01, rel=0.2)


@pytest.mark.parametrize(
    "make", [lambda: constant_traffic(0), lambda: poisson_traffic(-1), lambda: variable_traffic(5, 1)]
)
def test_invalid_rates(make) -> None:
    with pytest.raises(ValueError):
        make()


def test_payloads() -> None:
    same = constant_payload("x")
    assert [same(), same()] == ["x", "x"]

    pages = counter_payload("page")
    assert [pages(), pages(), pages()] == ["page 1", "page 2", "page 3"]
