"""Tests for the command catalog merge and store."""

import json

import pytest

from glide_compat.errors import CatalogError
from glide_compat.ingestion.catalog import (
    FAMILIES_FILE_NAME,
    INDEX_FILE_NAME,
    Catalog,
    CommandCatalogStore,
    group_by_family,
    merge_catalog,
)
from glide_compat.models import CommandEntry


def entry(command, family="strings", validated=True, method=None):
    return CommandEntry(
        command=command,
        family=family,
        method=method or command.lower(),
        validated=validated,
    )


class TestMergeCatalog:
    def test_entries_are_sorted_by_command(self):
        catalog = merge_catalog(Catalog(), [entry("SET"), entry("GET"), entry("APPEND")])

        assert [e.command for e in catalog.entries] == ["APPEND", "GET", "SET"]

    def test_merge_is_idempotent(self):
        entries = [entry("GET"), entry("XADD", family="streams")]

        once = merge_catalog(Catalog(), entries)
        twice = merge_catalog(once, entries)

        assert twice == once

    def test_merge_is_commutative_for_disjoint_commands(self):
        first = [entry("GET"), entry("SET")]
        second = [entry("HGET", family="hashes")]

        a = merge_catalog(merge_catalog(Catalog(), first), second)
        b = merge_catalog(merge_catalog(Catalog(), second), first)

        assert a == b

    def test_later_entry_replaces_earlier(self):
        stale = merge_catalog(Catalog(), [entry("LCS", family="other", validated=False)])

        updated = merge_catalog(stale, [entry("LCS", family="other", validated=True)])

        assert len(updated.entries) == 1
        assert updated.entries[0].validated

    def test_does_not_modify_input_catalog(self):
        original = Catalog(entries=[entry("GET")])

        merge_catalog(original, [entry("SET")])

        assert [e.command for e in original.entries] == ["GET"]


class TestGroupByFamily:
    def test_groups_in_order(self):
        families = group_by_family(
            [entry("GET"), entry("XADD", family="streams"), entry("SET")]
        )

        assert {k: [e.command for e in v] for k, v in families.items()} == {
            "strings": ["GET", "SET"],
            "streams": ["XADD"],
        }


class TestCommandCatalogStore:
    def given_store(self, tmp_path):
        self.store = CommandCatalogStore(tmp_path)

    def when_catalog_is_saved(self, *entries):
        self.written = self.store.save(Catalog(entries=list(entries)))

    def test_missing_catalog_loads_empty(self, tmp_path):
        self.given_store(tmp_path)

        assert self.store.load() == Catalog()
        assert self.store.load_families() == {}

    def test_round_trips_entries(self, tmp_path):
        self.given_store(tmp_path)
        self.when_catalog_is_saved(entry("SET"), entry("GET"))

        loaded = self.store.load()

        assert [e.command for e in loaded.entries] == ["GET", "SET"]
        assert self.written == [tmp_path / INDEX_FILE_NAME, tmp_path / FAMILIES_FILE_NAME]

    def test_writes_index_and_family_files(self, tmp_path):
        self.given_store(tmp_path)
        self.when_catalog_is_saved(entry("GET"), entry("XADD", family="streams"))

        index = json.loads((tmp_path / INDEX_FILE_NAME).read_text())
        families = json.loads((tmp_path / FAMILIES_FILE_NAME).read_text())

        assert [e["command"] for e in index["entries"]] == ["GET", "XADD"]
        assert sorted(families) == ["streams", "strings"]
        assert families["streams"][0]["method"] == "xadd"

    def test_load_families(self, tmp_path):
        self.given_store(tmp_path)
        self.when_catalog_is_saved(entry("GET"), entry("XADD", family="streams"))

        families = self.store.load_families()

        assert [e.command for e in families["streams"]] == ["XADD"]

    def test_corrupt_catalog_raises(self, tmp_path):
        self.given_store(tmp_path)
        (tmp_path / INDEX_FILE_NAME).write_text("{not json")

        with pytest.raises(CatalogError):
            self.store.load()

    def test_catalog_without_entries_raises(self, tmp_path):
        self.given_store(tmp_path)
        (tmp_path / INDEX_FILE_NAME).write_text('{"commands": []}')

        with pytest.raises(CatalogError, match="Malformed"):
            self.store.load()
