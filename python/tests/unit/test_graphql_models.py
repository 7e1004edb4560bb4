import pytest

from nerdgraph_graphql.errors import GraphQLResponseError
from nerdgraph_graphql.models import (
    GraphQLErrorItem,
    GraphQLErrorLocation,
    build_request,
    parse_graphql_response,
)
from nerdgraph_graphql.paths import PathStatus, find_by_path


class TestBuildRequest:
    def test_no_variables_has_no_declaration_clause(self):
        request = build_request("{ actor { user { name } } }")
        assert request.query == "query{ actor { user { name } } }"
        assert request.variables == {}

    def test_declarations_follow_insertion_order(self):
        request = build_request(
            "{ a }",
            {"b": ("String!", "x"), "a": ("[ID!]", ["1"]), "c": ("Int", None)},
        )
        assert request.query == "query($b: String!,$a: [ID!],$c: Int){ a }"
        assert list(request.variables) == ["b", "a", "c"]
        assert request.variables == {"b": "x", "a": ["1"], "c": None}

    def test_mutation_keyword(self):
        request = build_request("{ entityManagementDelete(id: $id) { id } }", {"id": ("ID!", "1")}, True)
        assert request.query.startswith("mutation($id: ID!)")

    def test_to_dict(self):
        request = build_request("{ a }", {"x": ("String", "y")})
        assert request.to_dict() == {"query": "query($x: String){ a }", "variables": {"x": "y"}}


class TestParseGraphQLResponse:
    def test_requires_object(self):
        with pytest.raises(GraphQLResponseError, match="Invalid GraphQL response"):
            parse_graphql_response(["data"])

    def test_data_defaults_to_none(self):
        response = parse_graphql_response({})
        assert response.data is None
        assert response.errors == []

    def test_explicit_null_data(self):
        assert parse_graphql_response({"data": None}).data is None

    def test_data_passed_through(self):
        assert parse_graphql_response({"data": {"ok": True}}).data == {"ok": True}

    def test_errors_not_a_list_are_ignored(self):
        assert parse_graphql_response({"data": {}, "errors": "boom"}).errors == []

    def test_full_error(self):
        response = parse_graphql_response(
            {
                "data": None,
                "errors": [
                    {
                        "message": "Access denied",
                        "locations": [{"line": 2, "column": 3}],
                        "path": ["actor", "entitySearch"],
                    }
                ],
            }
        )
        assert response.errors == [
            GraphQLErrorItem(
                message="Access denied",
                locations=[GraphQLErrorLocation(line=2, column=3)],
                path=["actor", "entitySearch"],
            )
        ]

    def test_locations_and_path_default_to_empty(self):
        response = parse_graphql_response({"errors": [{"message": "nope"}]})
        assert response.errors[0].locations == []
        assert response.errors[0].path == []

    @pytest.mark.parametrize(
        "error, match",
        [
            ("boom", "Invalid GraphQL error$"),
            ({}, "Invalid GraphQL error message"),
            ({"message": ""}, "Invalid GraphQL error message"),
            ({"message": "x", "locations": ["1:2"]}, "Invalid GraphQL error location$"),
            ({"message": "x", "locations": [{"line": "1", "column": 2}]}, "location line"),
            ({"message": "x", "locations": [{"line": 1}]}, "location column"),
            ({"message": "x", "path": "actor.user"}, "Invalid GraphQL error path"),
        ],
    )
    def test_malformed_error_aborts_parse(self, error, match):
        with pytest.raises(GraphQLResponseError, match=match) as exc_info:
            parse_graphql_response({"data": {}, "errors": [{"message": "fine"}, error]})
        assert exc_info.value.response is not None


class TestFindByPath:
    def test_found_value(self):
        resolved = find_by_path({"a": {"b": {"c": "x"}}}, "a.b.c")
        assert resolved.status is PathStatus.FOUND
        assert resolved.value == "x"

    @pytest.mark.parametrize("value", [False, 0, "", None, []])
    def test_falsy_values_are_found(self, value):
        resolved = find_by_path({"a": {"b": value}}, "a.b")
        assert resolved.found
        assert resolved.value == value

    def test_missing_terminal_key_is_absent(self):
        assert find_by_path({"a": {"b": {}}}, "a.b.c").absent

    def test_missing_intermediate_key_is_absent(self):
        assert find_by_path({"a": {}}, "a.b.c").absent

    def test_non_object_segment_is_invalid(self):
        assert find_by_path({"a": "text"}, "a.b.c").invalid
        assert find_by_path({"a": {"b": [1, 2]}}, "a.b.c").invalid

    def test_non_object_root_is_invalid(self):
        assert find_by_path(None, "a").invalid
        assert find_by_path("a", "a").invalid
