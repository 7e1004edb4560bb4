import pytest

from nerdgraph_graphql.models import GraphQLErrorItem, GraphQLResponse
from stubs import GraphQLClientStub
from teams_sync.errors import NerdgraphError
from teams_sync.graph.client import ENDPOINTS, NerdgraphClient, Region, to_region

CURSOR_PATH = "actor.entitySearch.nextCursor"


def _page(cursor, **extra):
    search = {"nextCursor": cursor} if cursor is not ... else {}
    search.update(extra)
    return GraphQLResponse(data={"actor": {"entitySearch": search}}, errors=[])


@pytest.mark.parametrize(
    "value, expected",
    [(None, Region.US), ("", Region.US), ("us", Region.US), ("EU", Region.EU), ("eu", Region.EU), ("APAC", Region.US)],
)
def test_to_region(value, expected):
    assert to_region(value) is expected


def test_single_query_without_pagination():
    graphql = GraphQLClientStub(GraphQLResponse(data={"ok": True}))
    client = NerdgraphClient(graphql)

    results = client.query("api-key", "{ ok }", {"id": ("ID!", "1")})

    assert results == [{"ok": True}]
    assert len(graphql.calls) == 1
    call = graphql.calls[0]
    assert call["url"] == ENDPOINTS[Region.US]
    assert call["headers"] == {"API-Key": "api-key"}
    assert call["payload"].query == "query($id: ID!){ ok }"
    assert call["payload"].variables == {"id": "1"}


def test_region_and_extra_headers():
    graphql = GraphQLClientStub(GraphQLResponse(data={}))
    client = NerdgraphClient(graphql)

    client.query("key", "{ ok }", {}, mutation=True, region=Region.EU, headers={"NewRelic-Requesting-Services": "teams-sync"})

    call = graphql.calls[0]
    assert call["url"] == "https://api.eu.newrelic.com/graphql"
    assert call["headers"] == {"API-Key": "key", "NewRelic-Requesting-Services": "teams-sync"}
    assert call["payload"].query == "mutation{ ok }"


def test_endpoint_override_wins_over_region():
    graphql = GraphQLClientStub(GraphQLResponse(data={}))
    client = NerdgraphClient(graphql, endpoint="http://localhost:8080/graphql")

    client.query("key", "{ ok }", region=Region.EU)

    assert graphql.calls[0]["url"] == "http://localhost:8080/graphql"


def test_pagination_follows_cursor_until_null():
    graphql = GraphQLClientStub(_page("X"), _page(None))
    client = NerdgraphClient(graphql)

    results = client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)

    assert len(results) == 2
    assert len(graphql.calls) == 2
    assert graphql.calls[0]["payload"].variables == {"cursor": None}
    assert graphql.calls[0]["payload"].query == "query($cursor: String){ page }"
    assert graphql.calls[1]["payload"].variables == {"cursor": "X"}


def test_pagination_stops_when_cursor_absent():
    graphql = GraphQLClientStub(_page("X"), _page(...))
    client = NerdgraphClient(graphql)

    results = client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)

    assert len(results) == 2
    assert len(graphql.calls) == 2


def test_pagination_does_not_mutate_caller_variables():
    graphql = GraphQLClientStub(_page(None))
    client = NerdgraphClient(graphql)
    variables = {"collectionId": ("ID!", "c-1")}

    client.query("key", "{ page }", variables, next_cursor_path=CURSOR_PATH)

    assert variables == {"collectionId": ("ID!", "c-1")}
    assert graphql.calls[0]["payload"].variables == {"collectionId": "c-1", "cursor": None}


def test_pagination_invalid_path_raises():
    graphql = GraphQLClientStub(GraphQLResponse(data={"actor": "nope"}))
    client = NerdgraphClient(graphql)

    with pytest.raises(NerdgraphError, match="Expected value at path"):
        client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)


def test_pagination_non_string_cursor_raises():
    graphql = GraphQLClientStub(_page(42))
    client = NerdgraphClient(graphql)

    with pytest.raises(NerdgraphError, match="Expected string at path"):
        client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)


def test_pagination_repeated_cursor_raises():
    graphql = GraphQLClientStub(_page("X"), _page("X"))
    client = NerdgraphClient(graphql)

    with pytest.raises(NerdgraphError, match="cursor repeated"):
        client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)


def test_graphql_errors_raise_with_error_list():
    errors = [GraphQLErrorItem(message="Not authorized")]
    graphql = GraphQLClientStub(_page("X"), GraphQLResponse(data=None, errors=errors))
    client = NerdgraphClient(graphql)

    with pytest.raises(NerdgraphError) as exc_info:
        client.query("key", "{ page }", {}, next_cursor_path=CURSOR_PATH)

    assert exc_info.value.errors == errors
    assert len(graphql.calls) == 2
