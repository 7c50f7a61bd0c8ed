import json
from pathlib import Path

import httpx
import pytest
import respx
from httpx import Response
from teamsnap.client import TeamSnapClient
from teamsnap.core.config import ROOT_URL, TeamSnapConfig
from teamsnap.core.errors import (
    ClientNotInitializedError,
    RelationNotFoundError,
    TeamSnapHTTPError,
    TeamSnapParseError,
)
from teamsnap.models import Link

ME_URL = "https://api.teamsnap.com/v3/me"
TEAMS_URL = "https://api.teamsnap.com/v3/teams/search?user_id=42"


def load_fixture(name: str) -> dict:
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def client():
    return TeamSnapClient(auth_token="mock-token")


@pytest.mark.asyncio
@respx.mock
async def test_initialize_stores_version_and_root_links(client):
    route = respx.get(ROOT_URL).mock(
        return_value=Response(200, json=load_fixture("root.json"))
    )

    async with client:
        assert client.initialized is False
        await client.initialize()

    assert route.called
    assert client.initialized is True
    assert client.version.startswith("3.")
    assert client.root_links[0] == Link(rel="me", href=ME_URL)
    assert len(client.root_links) == 5


@pytest.mark.asyncio
@respx.mock
async def test_headers_carry_json_content_type_and_bearer_token(client):
    route = respx.get(ROOT_URL).mock(
        return_value=Response(200, json=load_fixture("root.json"))
    )

    async with client:
        await client.initialize()

    sent = route.calls[0].request.headers
    assert sent.get("Authorization") == "Bearer mock-token"
    assert sent.get("Content-Type") == "application/json"


@pytest.mark.asyncio
@respx.mock
async def test_headers_applied_to_injected_http_client():
    route = respx.get(ROOT_URL).mock(
        return_value=Response(200, json=load_fixture("root.json"))
    )

    async with httpx.AsyncClient() as http:
        client = TeamSnapClient(auth_token="injected", http=http)
        await client.initialize()
        await client.aclose()
        # injected client is not closed by TeamSnapClient
        assert http.is_closed is False

    assert route.calls[0].request.headers["Authorization"] == "Bearer injected"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_root_me_returns_items(client):
    respx.get(ROOT_URL).mock(return_value=Response(200, json=load_fixture("root.json")))
    respx.get(ME_URL).mock(return_value=Response(200, json=load_fixture("me.json")))

    async with client:
        await client.initialize()
        resp = await client.fetch_root("me")

    assert resp.collection.rel == "me"
    assert len(resp.items) == 1
    assert resp.items[0].data_value_string("email") == "a@b.com"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_follows_item_links(client):
    respx.get(ROOT_URL).mock(return_value=Response(200, json=load_fixture("root.json")))
    respx.get(ME_URL).mock(return_value=Response(200, json=load_fixture("me.json")))
    teams = respx.get(TEAMS_URL).mock(
        return_value=Response(200, json=load_fixture("teams.json"))
    )

    async with client:
        await client.initialize()
        me = await client.fetch_root("me")
        # item links shadow the root "teams" rel
        resp = await client.fetch("teams", me.items[0].links)
        by_item = await client.fetch("teams", me.items[0])

    assert teams.call_count == 2
    assert resp.items[0].data_value_string("name") == "Otters"
    assert by_item.items[0].data_value_int("id") == 7


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_fetch_duplicate_rel_uses_first_link(client, respx_mock):
    respx_mock.get(ROOT_URL).mock(return_value=Response(200, json=load_fixture("root.json")))
    first = respx_mock.get("https://api.teamsnap.com/v3/members").mock(
        return_value=Response(200, json={"collection": {"rel": "members"}})
    )
    second = respx_mock.get("https://api.teamsnap.com/v3/members/legacy").mock(
        return_value=Response(200, json={"collection": {"rel": "members"}})
    )

    async with client:
        await client.initialize()
        await client.fetch_root("members")

    assert first.called
    assert not second.called


@pytest.mark.asyncio
@respx.mock
async def test_fetch_unknown_rel_raises_without_request(client):
    route = respx.get(ROOT_URL).mock(
        return_value=Response(200, json=load_fixture("root.json"))
    )

    async with client:
        await client.initialize()
        with pytest.raises(RelationNotFoundError) as exc:
            await client.fetch_root("other")

    assert exc.value.rel == "other"
    assert "No href found for rel: other" in str(exc.value)
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_rel_match_is_case_sensitive(client):
    links = [Link(rel="me", href=ME_URL)]
    async with client:
        with pytest.raises(RelationNotFoundError):
            await client.fetch("Me", links)


@pytest.mark.asyncio
async def test_fetch_root_before_initialize_raises(client):
    async with client:
        with pytest.raises(ClientNotInitializedError):
            await client.fetch_root("me")


@pytest.mark.asyncio
@respx.mock
async def test_connect_returns_initialized_client():
    respx.get(ROOT_URL).mock(return_value=Response(200, json=load_fixture("root.json")))

    client = await TeamSnapClient.connect(auth_token="mock-token")
    async with client:
        assert client.initialized
        assert client.version == "3.206.5"


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_propagates_unwrapped(client):
    respx.get(ROOT_URL).mock(side_effect=httpx.ConnectError("dns failure"))

    async with client:
        with pytest.raises(httpx.ConnectError):
            await client.initialize()

    assert client.initialized is False
    assert client.root_links == []


@pytest.mark.asyncio
@respx.mock
async def test_single_attempt_per_call(client):
    route = respx.get(ROOT_URL).mock(side_effect=httpx.ConnectTimeout("slow"))

    async with client:
        with pytest.raises(httpx.ConnectTimeout):
            await client.initialize()

    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_non_json_body_raises_parse_error(client):
    respx.get(ROOT_URL).mock(return_value=Response(200, text="<html>Not JSON</html>"))

    async with client:
        with pytest.raises(TeamSnapParseError) as exc:
            await client.initialize()

    assert "Expected JSON" in str(exc.value)


@pytest.mark.asyncio
@respx.mock
async def test_error_status_is_parsed_like_success(client):
    respx.get(ROOT_URL).mock(
        return_value=Response(401, json={"collection": {"version": "3.1.0"}})
    )

    async with client:
        resp = await client.initialize()

    assert resp.collection.version == "3.1.0"
    assert client.root_links == []


@pytest.mark.asyncio
@respx.mock
async def test_error_status_with_html_body_is_parse_error(client):
    respx.get(ROOT_URL).mock(return_value=Response(503, text="Service Unavailable"))

    async with client:
        with pytest.raises(TeamSnapParseError):
            await client.initialize()


@pytest.mark.asyncio
@respx.mock
async def test_json_without_collection_is_parse_error(client):
    respx.get(ROOT_URL).mock(return_value=Response(200, json=["not", "an", "envelope"]))

    async with client:
        with pytest.raises(TeamSnapParseError) as exc:
            await client.initialize()

    assert "collection envelope" in str(exc.value)


@pytest.mark.asyncio
@respx.mock
async def test_raise_for_status_surfaces_http_error():
    respx.get(ROOT_URL).mock(return_value=Response(403, text="Forbidden"))

    client = TeamSnapClient(auth_token="mock-token", raise_for_status=True)
    async with client:
        with pytest.raises(TeamSnapHTTPError) as exc:
            await client.initialize()

    assert exc.value.status_code == 403
    assert exc.value.response_text == "Forbidden"


@pytest.mark.asyncio
@respx.mock
async def test_from_config_uses_configured_root():
    route = respx.get("https://mock-ts.test/v3/").mock(
        return_value=Response(200, json=load_fixture("root.json"))
    )
    config = TeamSnapConfig(auth_token="cfg-token", root_url="https://mock-ts.test/v3/")

    async with TeamSnapClient.from_config(config) as client:
        await client.initialize()

    assert route.calls[0].request.headers["Authorization"] == "Bearer cfg-token"


def test_missing_token_rejected():
    with pytest.raises(ValueError):
        TeamSnapClient(auth_token="")
