"""Tests for the command-line interface."""

import tarfile

import pytest
from click.testing import CliRunner

from gqlb.cli import main, parse_value, split_assignment

from conftest import SCHEMA_SDL


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SCHEMA_SDL)
    return str(path)


@pytest.fixture
def runner():
    return CliRunner()


def normalize(text: str) -> str:
    return " ".join(text.split())


class TestHelpers:
    """Tests for argument parsing helpers."""

    def test_parse_value_json(self):
        assert parse_value("42") == 42
        assert parse_value('{"a": [1]}') == {"a": [1]}

    def test_parse_value_plain_string(self):
        assert parse_value("hello") == "hello"

    def test_split_assignment(self):
        assert split_assignment("--arg", "user.posts.first=3") == ("user.posts", "first", "3")

    def test_split_assignment_invalid(self):
        import click

        with pytest.raises(click.BadParameter):
            split_assignment("--arg", "first=3")


class TestCommands:
    """Tests for CLI commands."""

    def test_types(self, runner, schema_file):
        result = runner.invoke(main, ["types", "--schema", schema_file])
        assert result.exit_code == 0, result.output
        assert "query: Query" in result.output
        assert "SearchResult" in result.output

    def test_fields(self, runner, schema_file):
        result = runner.invoke(main, ["fields", "-s", schema_file, "User"])
        assert result.exit_code == 0, result.output
        assert "avatarUrl(size: Int!): String  [leaf]" in result.output
        assert "posts(first: Int): [Post!]!  [composite]" in result.output

    def test_fields_unknown_type(self, runner, schema_file):
        result = runner.invoke(main, ["fields", "-s", schema_file, "Nope"])
        assert result.exit_code != 0
        assert 'Type "Nope" does not exist' in result.output

    def test_select_with_args(self, runner, schema_file):
        result = runner.invoke(main, ["select", "-s", schema_file, "user.profile.location", "-a", "user.id=42"])
        assert result.exit_code == 0, result.output
        assert normalize(result.output) == (
            "query { user(id: 42) { profile { location { city country } } } }"
        )

    def test_select_named_with_variable(self, runner, schema_file):
        result = runner.invoke(
            main,
            ["select", "-s", schema_file, "-n", "GetUser", "user.name", "--var", "user.id=userId"],
        )
        assert result.exit_code == 0, result.output
        assert normalize(result.output) == "query GetUser($userId: ID!) { user(id: $userId) { name } }"

    def test_select_mutation(self, runner, schema_file):
        result = runner.invoke(
            main, ["select", "-s", schema_file, "-k", "mutation", "deleteUser", "-a", 'deleteUser.id="7"']
        )
        assert result.exit_code == 0, result.output
        assert normalize(result.output) == 'mutation { deleteUser(id: "7") }'

    def test_select_unknown_field(self, runner, schema_file):
        result = runner.invoke(main, ["select", "-s", schema_file, "user.password"])
        assert result.exit_code != 0
        assert 'Field "password" does not exist on type "User"' in result.output

    def test_select_from_archive(self, runner, tmp_path, schema_file):
        archive = tmp_path / "schema.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(schema_file, arcname="schema.graphql")

        result = runner.invoke(main, ["select", "-s", str(archive), "serverTime"])
        assert result.exit_code == 0, result.output
        assert normalize(result.output) == "query { serverTime }"
