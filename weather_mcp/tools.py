"""Tools exposed by the weather MCP server."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from fastmcp.exceptions import ToolError

TOOL_NAME = "getWeatherByCity"
UNAVAILABLE_FORECAST = "Unable to fetch data"


@dataclass(frozen=True)
class WeatherResult:
    temperature: Optional[str]
    forecast: str

    def to_dict(self) -> Dict[str, Any]:
        return {"temp": self.temperature, "forecast": self.forecast}


UNKNOWN_CITY = WeatherResult(temperature=None, forecast=UNAVAILABLE_FORECAST)

# Keys are lower-case city names.
KNOWN_CITIES: Dict[str, WeatherResult] = {
    "patiala": WeatherResult(temperature="30°C", forecast="Chances of high rain"),
    "delhi": WeatherResult(temperature="20°C", forecast="Chances of high warm winds"),
}


class WeatherFetchError(Exception):
    """Raised by a provider when its upstream source could not be reached."""


class WeatherProvider(Protocol):
    def fetch(self, city: str) -> WeatherResult:
        ...


class StaticWeatherProvider:
    """Answers from a fixed table. Unknown cities get the "unable to fetch" result."""

    def __init__(self, table: Optional[Dict[str, WeatherResult]] = None):
        self.table = KNOWN_CITIES if table is None else table

    def fetch(self, city: str) -> WeatherResult:
        return self.table.get(city.lower(), UNKNOWN_CITY)


def resolve_weather(city: str) -> WeatherResult:
    """Look up *city* case-insensitively in the built-in table."""
    return StaticWeatherProvider().fetch(city)


def serialize_result(result: WeatherResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, separators=(",", ":"))


def create_weather_tools(provider: Optional[WeatherProvider] = None) -> List[Callable]:
    """Create tools that are bound to the given weather provider."""
    if provider is None:
        provider = StaticWeatherProvider()

    def get_weather_by_city(city: str) -> str:
        """Get the temperature and forecast for *city* as a JSON string."""
        try:
            result = provider.fetch(city)
        except WeatherFetchError as e:
            raise ToolError(f"Weather lookup failed for {city!r}: {e}") from e
        return serialize_result(result)

    return [get_weather_by_city]


__all__ = [
    "KNOWN_CITIES",
    "StaticWeatherProvider",
    "TOOL_NAME",
    "UNAVAILABLE_FORECAST",
    "WeatherFetchError",
    "WeatherProvider",
    "WeatherResult",
    "create_weather_tools",
    "resolve_weather",
    "serialize_result",
]
