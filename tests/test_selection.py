"""Tests for selection normalization and merging."""

import pytest

from gqlb.core.errors import InvalidSelection
from gqlb.core.selection import Selection, merge_selections, normalize_selections


def leaf(name, alias=None):
    return Selection(name=name, alias=alias)


# =============================================================================
# Tests: List Shape
# =============================================================================


class TestListShape:
    """Tests for list-shaped selection results."""

    def test_keeps_order(self):
        result = normalize_selections([leaf("id"), leaf("name")])
        assert [s.name for s in result] == ["id", "name"]

    def test_merges_same_field(self):
        first = Selection(name="user", args={"id": "1"}, children=(leaf("id"),))
        second = Selection(name="user", args={"id": "2"}, children=(leaf("name"),))

        result = normalize_selections([first, leaf("other"), second])

        assert [s.name for s in result] == ["user", "other"]
        assert result[0].args == {"id": "1"}
        assert [c.name for c in result[0].children] == ["id", "name"]

    def test_merge_deduplicates_leaf_children(self):
        first = Selection(name="user", children=(leaf("id"), leaf("name")))
        second = Selection(name="user", children=(leaf("id"), leaf("email")))

        result = normalize_selections([first, second])

        assert [c.name for c in result[0].children] == ["id", "name", "email"]

    def test_merge_keeps_aliased_children_apart(self):
        first = Selection(name="user", children=(leaf("id"),))
        second = Selection(name="user", children=(leaf("id", alias="userId"),))

        result = normalize_selections([first, second])

        assert [c.response_key for c in result[0].children] == ["id", "userId"]

    def test_merge_nested_composites(self):
        first = Selection(name="user", children=(
            Selection(name="profile", children=(leaf("bio"),)),
        ))
        second = Selection(name="user", children=(
            Selection(name="profile", children=(leaf("avatar"),)),
        ))

        result = normalize_selections([first, second])

        profile = result[0].children[0]
        assert [c.name for c in profile.children] == ["bio", "avatar"]

    def test_merge_keeps_children_with_different_args(self):
        first = Selection(name="user", children=(Selection(name="avatarUrl", args={"size": 1}),))
        second = Selection(name="user", children=(
            Selection(name="avatarUrl", args={"size": 2}),
            Selection(name="avatarUrl", args={"size": 1}),
        ))

        result = normalize_selections([first, second])

        assert [c.args for c in result[0].children] == [{"size": 1}, {"size": 2}]

    def test_repeated_leaf_kept_once(self):
        result = normalize_selections([leaf("id"), leaf("id")])
        assert result == [leaf("id")]

    def test_plain_mapping_entry(self):
        result = normalize_selections([{"name": "user", "children": [{"name": "id"}]}])
        assert result == [Selection(name="user", children=(leaf("id"),))]

    def test_single_marker_accepted(self):
        assert normalize_selections(leaf("id")) == [leaf("id")]

    def test_tuple_accepted(self):
        assert normalize_selections((leaf("id"),)) == [leaf("id")]


# =============================================================================
# Tests: Keyed Shape
# =============================================================================


class TestKeyedShape:
    """Tests for dict-shaped selection results."""

    def test_alias_when_key_differs(self):
        result = normalize_selections({"userId": leaf("id")})
        assert result == [Selection(name="id", alias="userId")]

    def test_no_alias_when_key_matches(self):
        result = normalize_selections({"id": leaf("id")})
        assert result == [leaf("id")]

    def test_same_field_under_two_keys(self):
        result = normalize_selections({
            "first": Selection(name="user", args={"id": "1"}),
            "second": Selection(name="user", args={"id": "2"}),
        })
        assert [(s.alias, s.args["id"]) for s in result] == [("first", "1"), ("second", "2")]


# =============================================================================
# Tests: Invalid Entries
# =============================================================================


class TestInvalidSelections:
    """Tests for InvalidSelection."""

    @pytest.mark.parametrize("value", [42, None, object(), {"nope": 1}])
    def test_invalid_entry(self, value):
        with pytest.raises(InvalidSelection):
            normalize_selections([leaf("id"), value])

    def test_string_result(self):
        with pytest.raises(InvalidSelection):
            normalize_selections("id")

    def test_invalid_keyed_value(self):
        with pytest.raises(InvalidSelection):
            normalize_selections({"id": "id"})

    def test_error_carries_value(self):
        with pytest.raises(InvalidSelection) as exc_info:
            normalize_selections([3.5])
        assert exc_info.value.value == 3.5


def test_merge_selections_custom_key():
    result = merge_selections(
        [leaf("id", alias="a"), leaf("id", alias="b")],
        key=lambda s: (s.name, s.alias),
    )
    assert len(result) == 2
