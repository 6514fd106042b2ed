import json

import anyio
from fastmcp import Client

from weather_mcp.main import create_app
from weather_mcp.tools import TOOL_NAME, WeatherResult


def _content(result):
    # Newer fastmcp clients return a CallToolResult, older ones the content list.
    return getattr(result, "content", result)


def _call(app, city):
    async def go():
        async with Client(app) as client:
            return _content(await client.call_tool(TOOL_NAME, {"city": city}))

    return anyio.run(go)


def test_single_tool_with_city_schema():
    async def go():
        async with Client(create_app()) as client:
            return await client.list_tools()

    listed = anyio.run(go)
    assert [t.name for t in listed] == ["getWeatherByCity"]
    schema = listed[0].inputSchema
    assert schema["required"] == ["city"]
    assert schema["properties"]["city"]["type"] == "string"


def test_response_is_one_text_block():
    content = _call(create_app(), "Delhi")
    assert len(content) == 1
    assert content[0].type == "text"
    assert content[0].text == '{"temp":"20°C","forecast":"Chances of high warm winds"}'


def test_unknown_city_over_protocol():
    content = _call(create_app(), "Tokyo")
    assert json.loads(content[0].text) == {"temp": None, "forecast": "Unable to fetch data"}


def test_custom_provider_is_served():
    class Fixed:
        def fetch(self, city):
            return WeatherResult("5°C", f"Snow in {city}")

    content = _call(create_app(Fixed()), "Oslo")
    assert json.loads(content[0].text) == {"temp": "5°C", "forecast": "Snow in Oslo"}
