"""Tests for building the GLIDE API inventory."""

import json
from pathlib import Path

import pytest

from glide_compat.inventory import build_inventory, write_inventory


@pytest.fixture
def fixtures_path():
    return Path(__file__).parent / "fixtures" / "declarations"


@pytest.fixture
def declarations(fixtures_path):
    return {
        path.name: path.read_text()
        for path in (fixtures_path / "BaseClient.d.ts", fixtures_path / "GlideJson.d.ts")
    }


class TestBuildInventory:
    def test_groups_methods_by_declaring_file(self, declarations):
        inventory = build_inventory(declarations)

        assert list(inventory.files) == ["BaseClient", "GlideJson"]
        assert len(inventory.files["GlideJson"]) == 3
        assert inventory.total == 22

    def test_assigns_categories(self, declarations):
        inventory = build_inventory(declarations)

        categories = {m.name: m.category for m in inventory.files["BaseClient"]}
        assert categories["xgroupCreate"] == "streams"
        assert categories["zadd"] == "sortedsets"
        assert categories["customCommand"] == "general"

    def test_index_keeps_declarations_from_every_file(self, declarations):
        inventory = build_inventory(declarations)

        index = inventory.index()
        assert [m.declaring_file for m in index["set"]] == ["BaseClient", "GlideJson"]

    def test_category_counts_sum_to_total(self, declarations):
        inventory = build_inventory(declarations)

        counts = inventory.category_counts()
        assert sum(counts.values()) == inventory.total
        assert list(counts.values()) == sorted(counts.values(), reverse=True)

    def test_empty_input(self):
        inventory = build_inventory({})

        assert inventory.total == 0
        assert inventory.to_dict() == {"files": {}, "total": 0, "categories": {}}


class TestWriteInventory:
    def test_writes_json(self, declarations, tmp_path):
        inventory = build_inventory(declarations)
        path = tmp_path / "out" / "glide-api.json"

        write_inventory(inventory, path)

        data = json.loads(path.read_text())
        assert data["total"] == 22
        first = data["files"]["BaseClient"][0]
        assert first["name"] == "get"
        assert first["returnType"] == "GlideString | null"
        assert first["isAsync"] is True
