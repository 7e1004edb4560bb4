import pytest

from teams_sync.canonical_models import TeamMembership, TeamResource, TeamTag
from teams_sync.errors import NerdgraphError
from teams_sync.graph.mappers.teams import (
    map_team_entity,
    map_team_resource,
    map_team_tags,
    resources_to_input,
    tags_to_input,
)
from teams_sync.graph.mappers.users import map_user_entity


def test_resource_without_title():
    resource = map_team_resource({"type": "SLACK", "content": "#eng", "title": 7})
    assert resource == TeamResource(type="SLACK", title=None, content="#eng")


@pytest.mark.parametrize(
    "raw, match",
    [
        ("EMAIL", "Invalid team resource$"),
        ({"content": "x"}, "type"),
        ({"type": "", "content": "x"}, "type"),
        ({"type": "EMAIL"}, "content"),
        ({"type": "EMAIL", "content": 1}, "content"),
    ],
)
def test_resource_rejects(raw, match):
    with pytest.raises(NerdgraphError, match=match):
        map_team_resource(raw)


def test_tags_keep_order():
    tags = map_team_tags([{"key": "b", "values": ["1"]}, {"key": "a", "values": []}])
    assert tags == [TeamTag(key="b", values=["1"]), TeamTag(key="a", values=[])]


@pytest.mark.parametrize(
    "raw, match",
    [
        (None, "Invalid tags"),
        ({"foo": ["bar"]}, "Invalid tags"),
        (["foo"], "Invalid tag item$"),
        ([{"values": []}], "key"),
        ([{"key": "foo", "values": "bar"}], "values"),
        ([{"key": "foo", "values": ["bar", 1]}], "values"),
    ],
)
def test_tags_reject(raw, match):
    with pytest.raises(NerdgraphError, match=match):
        map_team_tags(raw)


def test_entity_defaults():
    team = map_team_entity(
        {
            "id": "team-1",
            "name": "engineering",
            "description": None,
            "aliases": ["epd", 2],
            "resources": None,
            "membership": {"id": "collection-1"},
            "tags": [],
        }
    )
    assert team.description == ""
    assert team.aliases == []
    assert team.resources == []
    assert team.membership == TeamMembership(id="collection-1")


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"id": ""}, "id"),
        ({"name": None}, "name"),
        ({"membership": None}, "membership"),
        ({"membership": {"id": 1}}, "membership"),
        ({"resources": [{"type": "EMAIL"}]}, "content"),
    ],
)
def test_entity_rejects(overrides, match):
    raw = {"id": "team-1", "name": "engineering", "membership": {"id": "c"}, "tags": []}
    raw.update(overrides)
    with pytest.raises(NerdgraphError, match=match):
        map_team_entity(raw)


def test_input_shapes():
    assert tags_to_input({"foo": ("bar", "baz")}) == [{"key": "foo", "values": ["bar", "baz"]}]
    assert resources_to_input([TeamResource(type="EMAIL", content="a@example.com")]) == [
        {"type": "EMAIL", "title": None, "content": "a@example.com"}
    ]


def test_tags_round_trip_through_input():
    tags = map_team_tags(tags_to_input({"foo": ["bar"]}))
    assert tags == [TeamTag(key="foo", values=["bar"])]


@pytest.mark.parametrize("raw", [{"guid": "", "name": "Joe"}, {"guid": "g"}, "g"])
def test_user_entity_rejects(raw):
    with pytest.raises(NerdgraphError, match="incompatible"):
        map_user_entity(raw)
