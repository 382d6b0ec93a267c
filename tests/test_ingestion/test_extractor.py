"""Tests for extracting commands and public methods from raw documents."""

from pathlib import Path

import pytest

from glide_compat.ingestion.extractor import (
    extract_command_tokens,
    extract_markdown_table_commands,
    extract_public_methods,
)


@pytest.fixture
def fixtures_path():
    return Path(__file__).parent.parent / "fixtures"


class TestExtractMarkdownTableCommands:
    def test_reads_first_cell_of_each_row(self, fixtures_path):
        md = (fixtures_path / "docs" / "commands.md").read_text()

        commands = extract_markdown_table_commands(md)

        assert commands == [
            "GET",
            "SET",
            "HGETALL",
            "XGROUP CREATE",
            "BITFIELD_RO",
            "PING",
            "DBSIZE",
            "LCS",
        ]

    def test_collapses_whitespace_and_upper_cases(self):
        assert extract_markdown_table_commands("|  xgroup   create | Done |") == ["XGROUP CREATE"]

    def test_text_without_tables_yields_nothing(self):
        assert extract_markdown_table_commands("Just `GET` in prose.") == []


class TestExtractCommandTokens:
    def test_reads_code_spans(self, fixtures_path):
        html = (fixtures_path / "docs" / "commands.html").read_text()

        assert extract_command_tokens(html) == {"GET", "XGROUP CREATE", "HGETALL"}

    def test_rejects_long_tokens(self):
        token = "A" * 41

        assert extract_command_tokens(f"<code>{token}</code>") == set()

    def test_keeps_tokens_at_length_limit(self):
        token = "A" * 40

        assert extract_command_tokens(f"`{token}`") == {token}


class TestExtractPublicMethods:
    def given_source(self, fixtures_path, name):
        self.source = (fixtures_path / "sources" / name).read_text()

    def when_methods_are_extracted(self, owner):
        self.methods = extract_public_methods(self.source, owner)

    def then_method(self, name):
        return next(m for m in self.methods if m.name == name)

    def test_finds_async_methods(self, fixtures_path):
        self.given_source(fixtures_path, "BaseClient.ts")
        self.when_methods_are_extracted("BaseClient")
        assert [m.name for m in self.methods] == [
            "get",
            "set",
            "hgetall",
            "xgroupCreate",
            "bitfieldReadOnly",
            "ensureConnected",
        ]
        assert all(m.owner == "BaseClient" for m in self.methods)

    def test_reads_multiline_parameters(self, fixtures_path):
        self.given_source(fixtures_path, "BaseClient.ts")
        self.when_methods_are_extracted("BaseClient")
        get = self.then_method("get")
        assert "key: GlideString" in get.params_signature
        assert "options?: DecoderOption" in get.params_signature
        assert get.return_type == "GlideString | null"

    def test_nested_generic_return_is_truncated(self, fixtures_path):
        """The return type stops at the first ">"."""
        self.given_source(fixtures_path, "BaseClient.ts")
        self.when_methods_are_extracted("BaseClient")
        assert self.then_method("hgetall").return_type == "Record<string, GlideString"

    def test_finds_static_methods(self, fixtures_path):
        self.given_source(fixtures_path, "GlideClient.ts")
        self.when_methods_are_extracted("GlideClient")
        assert [m.name for m in self.methods] == ["createClient", "ping", "dbsize"]
        assert self.then_method("dbsize").params_signature == ""
