"""Shared helpers for the runnable examples."""

from __future__ import annotations


class WeatherClient:
    """Client the examples replace with doubles."""

    def __init__(self, base_url: str = "https://weather.invalid") -> None:
        self.base_url = base_url

    def temperature(self, city: str) -> float:
        msg = f"network access to {self.base_url} is disabled in examples"
        raise RuntimeError(msg)

    def unit(self) -> str:
        return "C"

    def describe(self, city: str) -> str:
        return f"{city}: {self.temperature(city)}{self.unit()}"

    @staticmethod
    def api_version() -> str:
        return "v1"


def warmest(client: WeatherClient, cities: list[str]) -> str:
    """Return the city reporting the highest temperature."""
    return max(cities, key=client.temperature)
