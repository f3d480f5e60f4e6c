"""Tests for the deep redaction engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel

from safelog.exceptions import CyclicReferenceError, MaxDepthExceededError
from safelog.redaction import RedactionPath, sanitize, unset


class Credentials(BaseModel):
    username: str
    password: str


@dataclass
class Session:
    device: str
    password: str


@dataclass
class TreeNode:
    name: str
    children: list[TreeNode] = field(default_factory=list)


class TestDepthIndependentMatching:
    """Paths match beneath every node, not only at the root."""

    def test_single_key_removed_at_every_depth(self):
        data = {"a": {"password": 1}, "b": [{"password": 2}]}
        assert sanitize(data, ["password"]) == {"a": {}, "b": [{}]}

    def test_multi_key_matches_beneath_nested_node(self):
        data = {"wrap": {"user": {"token": "x"}}}
        assert sanitize(data, ["user.token"]) == {"wrap": {"user": {}}}

    def test_multi_key_removed_at_root_and_in_list_elements(self):
        data = {"user": {"token": "a", "id": 1}, "items": [{"user": {"token": "b"}}]}
        assert sanitize(data, ["user.token"]) == {"user": {"id": 1}, "items": [{"user": {}}]}

    def test_incomplete_chain_leaves_siblings_alone(self):
        data = {"user": {"name": "ada"}, "token": "keep"}
        assert sanitize(data, ["user.token"]) == {"user": {"name": "ada"}, "token": "keep"}

    def test_several_paths(self, login_payload):
        result = sanitize(login_payload, ["password", "user.token"])
        assert result == {
            "username": "ada",
            "profile": {"user": {"id": 7}},
            "sessions": [{"device": "phone"}, {"device": "laptop"}],
        }

    def test_list_root(self):
        assert sanitize([{"password": 1}, {"ok": 2}], ["password"]) == [{}, {"ok": 2}]

    def test_tuple_elements_are_traversed(self):
        assert sanitize({"pairs": ({"password": 1}, 2)}, ["password"]) == {"pairs": ({}, 2)}

    def test_non_string_keys(self):
        assert sanitize({1: {"password": "x", "y": 2}}, ["password"]) == {1: {"y": 2}}


class TestPathSyntax:
    def test_bracket_index_selects_one_element(self):
        data = {"items": [{"secret": 1}, {"secret": 2}]}
        assert sanitize(data, ["items[0].secret"]) == {"items": [{}, {"secret": 2}]}

    def test_terminal_list_index_is_blanked(self):
        assert sanitize({"codes": ["a", "b", "c"]}, ["codes.1"]) == {"codes": ["a", None, "c"]}

    def test_terminal_tuple_index_is_blanked(self):
        data = {"pair": ("user", "secret")}
        assert sanitize(data, ["pair.1"]) == {"pair": ("user", None)}
        assert data == {"pair": ("user", "secret")}

    def test_nested_tuples_stay_tuples(self):
        result = sanitize({"rows": (("a", "b"), ["c"])}, ["rows.0.0"])
        assert result == {"rows": ((None, "b"), ["c"])}

    def test_out_of_range_index_is_ignored(self):
        assert sanitize({"codes": ["a"]}, ["codes.3"]) == {"codes": ["a"]}

    def test_literal_dotted_key_wins_over_chain(self):
        data = {"user.token": "x", "user": {"token": "y"}}
        assert sanitize(data, ["user.token"]) == {"user": {"token": "y"}}

    def test_separated_keys_do_not_match_literal_dotted_key(self):
        data = {"user.token": "x", "user": {"token": "y"}}
        assert sanitize(data, [("user", "token")]) == {"user.token": "x", "user": {}}

    def test_path_objects_and_key_sequences(self):
        data = {"a": {"b": 1, "c": 2, "d": 3}}
        result = sanitize(data, [RedactionPath.from_keys("a", "b"), ("a", "c")])
        assert result == {"a": {"d": 3}}


class TestCopySemantics:
    def test_does_not_mutate_input(self, login_payload):
        before = copy.deepcopy(login_payload)
        sanitize(login_payload, ["password", "user.token"])
        assert login_payload == before

    def test_output_never_aliases_input(self, login_payload):
        result = sanitize(login_payload, [])
        assert result == login_payload
        assert result is not login_payload
        assert result["profile"] is not login_payload["profile"]
        assert result["sessions"][0] is not login_payload["sessions"][0]

    def test_idempotent(self, login_payload):
        paths = ["password", "user.token"]
        once = sanitize(login_payload, paths)
        assert sanitize(once, paths) == once

    @pytest.mark.parametrize("value", [None, 0, "", "text", 42, False, {}, []])
    def test_falsy_scalar_and_empty_values_pass_through(self, value):
        assert sanitize(value, ["password"]) is value

    def test_shared_references_are_redacted_independently(self):
        shared = {"password": 1, "x": 2}
        result = sanitize({"a": shared, "b": shared}, ["password"])
        assert result == {"a": {"x": 2}, "b": {"x": 2}}
        assert shared == {"password": 1, "x": 2}


class TestModels:
    def test_pydantic_model_is_redacted_as_dict(self):
        creds = Credentials(username="ada", password="hunter2")
        assert sanitize(creds, ["password"]) == {"username": "ada"}
        assert creds.password == "hunter2"

    def test_nested_models_and_dataclasses(self):
        data = {
            "creds": Credentials(username="ada", password="hunter2"),
            "sessions": [Session(device="phone", password="p")],
        }
        assert sanitize(data, ["password"]) == {
            "creds": {"username": "ada"},
            "sessions": [{"device": "phone"}],
        }


class TestHazards:
    def test_cycle_is_reported(self):
        data: dict = {"a": 1}
        data["self"] = data
        with pytest.raises(CyclicReferenceError):
            sanitize(data, ["a"])

    def test_cycle_through_list_is_reported(self):
        items: list = []
        items.append({"items": items})
        with pytest.raises(CyclicReferenceError):
            sanitize({"items": items}, ["password"])

    def test_dataclass_cycle_is_reported(self):
        node = TreeNode("root")
        node.children.append(node)
        with pytest.raises(CyclicReferenceError):
            sanitize({"node": node}, ["password"])

    def test_dataclass_depth_limit(self):
        node = TreeNode("leaf")
        for depth in range(10):
            node = TreeNode(f"n{depth}", [node])
        with pytest.raises(MaxDepthExceededError):
            sanitize(node, ["password"], max_depth=5)

    def test_depth_limit(self):
        node: dict = {}
        for _ in range(10):
            node = {"n": node}
        with pytest.raises(MaxDepthExceededError) as exc_info:
            sanitize(node, ["password"], max_depth=5)
        assert exc_info.value.max_depth == 5
        assert sanitize(node, ["password"], max_depth=20) == node


class TestUnset:
    def test_reports_whether_something_was_removed(self):
        node = {"user": {"token": "x"}}
        assert unset(node, RedactionPath.parse("user.token")) is True
        assert node == {"user": {}}
        assert unset(node, RedactionPath.parse("user.token")) is False
