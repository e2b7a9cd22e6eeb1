"""Example tests demonstrating mock usage."""

from __future__ import annotations

import moka
from examples._utils import WeatherClient


def test_mock_keeps_real_behaviour() -> None:
    """Mocks forward unconfigured methods to the parent implementation."""
    client = moka.mock(WeatherClient, {"temperature": 18.0})

    assert client.describe("Paris") == "Paris: 18.0C"
    client.moka.assert_called_with("temperature", "Paris")
    assert client.moka.call_count("describe") == 0


def test_mock_runs_parent_constructor() -> None:
    """Constructor arguments reach the parent when not configured."""
    client = moka.mock(WeatherClient, {"temperature": 5.0}, "https://example.test")

    assert client.base_url == "https://example.test"


def test_mock_class_tracks_instances() -> None:
    """Each instance of a class double gets its own controller."""
    cls = moka.mock_class(WeatherClient, {"__init__": None, "unit": "F"})
    first = cls("https://one.test")
    second = cls("https://two.test")

    assert first.unit() == second.unit() == "F"
    assert cls.moka.instance(0).report("__init__") == [["https://one.test"]]
    assert cls.moka.instance(1).report("__init__") == [["https://two.test"]]
    assert cls.moka.instance(1) is second.moka
