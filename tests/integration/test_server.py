"""Integration tests for the LifeTwin MCP server."""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace

import pytest
from fastmcp import Client

from lifetwin.core.server.app import create_app
from lifetwin.domains.twin.domain_logic.simulation_config import DEFAULT_CONFIG


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _payload(result):
    """Decode the JSON text block of a tool result (list or CallToolResult)."""
    blocks = getattr(result, "content", result)
    return json.loads(blocks[0].text)


ALL_EXPECTED_TOOLS = [
    "health_check",
    "life_twin_simulation",
    "persona_simulation",
    "twin_chat_context",
]

JUNK_SPEND_SNAPSHOT = {
    "twinType": "LifeTwin",
    "heightCm": 175,
    "weightKg": 88,
    "stepsPerDay": 4200,
    "workoutsPerWeek": 1,
    "averageSleep": 5.5,
    "hba1c": 6.3,
    "eatingOutSpend": 700,
    "lateNightFoodSpend": 220,
    "alcoholSpend": 250,
}


@pytest.fixture
def client():
    """Create an MCP client connected to a fresh server instance."""
    return Client(create_app())


def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    """health_check tool should return status ok and the config version."""
    async def _check():
        async with client:
            result = await client.call_tool("health_check", {})
            result_text = str(result)
            assert "ok" in result_text
            assert DEFAULT_CONFIG.version in result_text
    _run(_check())


def test_life_twin_simulation_round_trip(client):
    """A dashboard snapshot comes back as a camelCase simulation result."""
    async def _check():
        async with client:
            result = await client.call_tool(
                "life_twin_simulation", {"snapshot": JUNK_SPEND_SNAPSHOT}
            )
            data = _payload(result)
            assert data["scores"]["body"] == 45
            assert data["scores"]["money"] is None
            forecast = data["forecast"]
            assert forecast["weightBaseline"][12] > forecast["weightImproved"][12]
            assert forecast["savingsBaseline"] == [None] * 13
            titles = [i["title"] for i in data["healthInsights"]]
            assert "Metabolic Risk" in titles
    _run(_check())


def test_life_twin_simulation_rejects_bad_snapshot(client):
    """Malformed snapshot values surface as tool errors."""
    async def _check():
        async with client:
            with pytest.raises(Exception, match="must not be negative"):
                await client.call_tool("life_twin_simulation", {"snapshot": {"weightKg": -1}})
    _run(_check())


def test_persona_simulation(client):
    """persona_simulation runs a preset and honours the mode argument."""
    async def _check():
        async with client:
            result = await client.call_tool(
                "persona_simulation", {"persona": "prediabetic", "mode": "money"}
            )
            data = _payload(result)
            assert data["persona"] == "prediabetic"
            assert data["scores"]["body"] is None
            assert data["scores"]["money"] == 55
    _run(_check())


def test_twin_chat_context_defaults_to_strict(client):
    """Without a privacy_mode the server default (strict) applies."""
    async def _check():
        async with client:
            result = await client.call_tool(
                "twin_chat_context", {"snapshot": JUNK_SPEND_SNAPSHOT}
            )
            data = _payload(result)
            assert data["privacy_mode"] == "strict"
            assert "snapshot" not in data["context"]
            assert data["context"]["scores"]["body"] == 45
    _run(_check())


def test_twin_chat_context_explicit(client):
    async def _check():
        async with client:
            result = await client.call_tool(
                "twin_chat_context",
                {"snapshot": JUNK_SPEND_SNAPSHOT, "privacy_mode": "explicit"},
            )
            data = _payload(result)
            assert data["context"]["snapshot"]["weight_kg"] == 88
    _run(_check())


def test_simulation_config_resource(client):
    """The active config is discoverable as a resource."""
    async def _check():
        async with client:
            contents = await client.read_resource("config://twin/simulation")
            data = json.loads(contents[0].text)
            assert data["version"] == DEFAULT_CONFIG.version
            assert data["config"]["scoring"]["base_score"] == 50
    _run(_check())


def test_prompts_registered(client):
    async def _check():
        async with client:
            prompts = await client.list_prompts()
            names = [p.name for p in prompts]
            assert "twin_review_prompt" in names
            assert "spending_cut_prompt" in names
    _run(_check())


def test_config_override_is_used():
    """create_app(config_override=...) drives every tool and the resource."""
    config = replace(DEFAULT_CONFIG, version="test-override")
    client = Client(create_app(config_override=config))

    async def _check():
        async with client:
            result = await client.call_tool(
                "life_twin_simulation", {"snapshot": JUNK_SPEND_SNAPSHOT}
            )
            assert _payload(result)["configVersion"] == "test-override"
            contents = await client.read_resource("config://twin/simulation")
            assert json.loads(contents[0].text)["version"] == "test-override"
    _run(_check())


def test_config_file_from_settings(tmp_path, monkeypatch):
    """SIMULATION_CONFIG_PATH points the server at a YAML override file."""
    path = tmp_path / "simulation.yaml"
    path.write_text('version: "from-yaml"\n')
    monkeypatch.setenv("SIMULATION_CONFIG_PATH", str(path))
    client = Client(create_app())

    async def _check():
        async with client:
            result = await client.call_tool("health_check", {})
            assert "from-yaml" in str(result)
    _run(_check())
