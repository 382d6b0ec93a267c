"""Tests for the tool invocation surface."""

from pathlib import Path

import pytest

from glide_compat.errors import FetchError
from glide_compat.tools import TOOLS, call_tool, list_tools


@pytest.fixture
def fixtures_path():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def declaration_texts(fixtures_path):
    return {
        path.name: path.read_text()
        for path in sorted((fixtures_path / "declarations").glob("*.d.ts"))
    }


@pytest.fixture
def ingest_sources(fixtures_path):
    return {
        "md": (fixtures_path / "docs" / "commands.md").read_text(),
        "tsBase": (fixtures_path / "sources" / "BaseClient.ts").read_text(),
        "tsClient": (fixtures_path / "sources" / "GlideClient.ts").read_text(),
        "tsCluster": (fixtures_path / "sources" / "GlideClusterClient.ts").read_text(),
        "tsJson": (fixtures_path / "sources" / "GlideJson.ts").read_text(),
    }


class TestCallTool:
    async def when_tool_is_called(self, name, arguments=None):
        self.response = await call_tool(name, arguments)
        self.payload = self.response.to_dict()

    def then_is_error(self):
        assert self.response.is_error
        assert self.payload["isError"] is True
        assert self.payload["content"][0]["type"] == "text"

    def then_is_success(self):
        assert not self.response.is_error
        assert "isError" not in self.payload

    async def test_extract_returns_inventory(self, declaration_texts):
        await self.when_tool_is_called("api.extract", {"texts": declaration_texts})
        self.then_is_success()
        assert self.response.structured_content["total"] == 22
        assert "Extracted 22 methods from 2 files" in self.payload["content"][0]["text"]

    async def test_extract_writes_inventory(self, declaration_texts, tmp_path):
        path = tmp_path / "inventory.json"
        await self.when_tool_is_called(
            "api.extract", {"texts": declaration_texts, "outputPath": str(path)}
        )
        self.then_is_success()
        assert path.exists()

    async def test_find_equivalent(self):
        await self.when_tool_is_called(
            "api.findEquivalent", {"sourceClient": "ioredis", "symbol": "get(key)"}
        )
        self.then_is_success()
        results = self.response.structured_content["results"]
        assert [r["equivalent"]["glide"] for r in results] == ["get(key)"]

    async def test_find_equivalent_without_match_is_not_an_error(self):
        await self.when_tool_is_called(
            "api.findEquivalent", {"sourceClient": "ioredis", "symbol": "nope()"}
        )
        self.then_is_success()
        assert self.response.structured_content["results"] == []

    async def test_unknown_client_is_error_payload(self):
        await self.when_tool_is_called(
            "api.findEquivalent", {"sourceClient": "jedis", "symbol": "get(key)"}
        )
        self.then_is_error()
        assert "jedis" in self.response.structured_content["error"]

    async def test_missing_argument_is_error_payload(self):
        await self.when_tool_is_called("api.findEquivalent", {"sourceClient": "ioredis"})
        self.then_is_error()

    async def test_unexpected_argument_is_error_payload(self):
        await self.when_tool_is_called("api.search", {"keyword": "get", "limit": 3})
        self.then_is_error()

    async def test_unknown_tool_is_error_payload(self):
        await self.when_tool_is_called("api.unknown")
        self.then_is_error()
        assert "Unknown tool" in self.response.structured_content["error"]

    async def test_search(self):
        await self.when_tool_is_called("api.search", {"keyword": "stream"})
        self.then_is_success()
        assert self.response.structured_content["results"]

    async def test_diff(self, declaration_texts):
        await self.when_tool_is_called(
            "api.diff",
            {
                "sourceClient": "ioredis",
                "symbol": "xadd(key, id, field value ...)",
                "texts": declaration_texts,
            },
        )
        self.then_is_success()
        report = self.response.structured_content["reports"][0]
        assert report["found"] is True
        assert report["arityMismatch"] is False
        assert "compatible" in self.payload["content"][0]["text"]

    async def test_validate_surface_writes_reports(self, fixtures_path, tmp_path):
        source = (fixtures_path / "sources" / "BaseClient.ts").resolve().as_uri()
        await self.when_tool_is_called(
            "validate.glideSurface", {"urls": [source], "outputDir": str(tmp_path)}
        )
        self.then_is_success()
        structured = self.response.structured_content
        assert structured["totalEntries"] > 0
        assert (tmp_path / "VALIDATION_REPORT.json").exists()
        assert len(structured["written"]) == 3

    async def test_validate_surface_without_report(self, tmp_path):
        await self.when_tool_is_called(
            "validate.glideSurface",
            {"texts": {"a.ts": "get(key) set(key, v)"}, "writeReport": False, "outputDir": str(tmp_path)},
        )
        self.then_is_success()
        assert self.response.structured_content["extractedMethodCount"] == 2
        assert list(tmp_path.iterdir()) == []

    async def test_fetch_failure_propagates(self, tmp_path):
        with pytest.raises(FetchError):
            await call_tool("api.extract", {"urls": [(tmp_path / "missing.ts").as_uri()]})

    async def test_ingest_then_browse_families(self, ingest_sources, tmp_path):
        await self.when_tool_is_called(
            "commands.ingest",
            {"start": 0, "count": 10, "sources": ingest_sources, "outputDir": str(tmp_path)},
        )
        self.then_is_success()
        assert self.response.structured_content["validatedCount"] == 7
        assert "Validated 7/8" in self.payload["content"][0]["text"]

        await self.when_tool_is_called("commands.listFamilies", {"outputDir": str(tmp_path)})
        self.then_is_success()
        assert "streams" in self.response.structured_content["families"]

        await self.when_tool_is_called(
            "commands.getByFamily", {"family": "streams", "outputDir": str(tmp_path)}
        )
        self.then_is_success()
        assert self.response.structured_content["totalCount"] == 1
        assert self.response.structured_content["entries"][0]["method"] == "xgroupCreate"

    async def test_ingest_count_over_limit_is_error_payload(self, ingest_sources, tmp_path):
        await self.when_tool_is_called(
            "commands.ingest",
            {"count": 21, "sources": ingest_sources, "outputDir": str(tmp_path)},
        )
        self.then_is_error()

    async def test_ingest_start_past_end_is_error_payload(self, ingest_sources, tmp_path):
        await self.when_tool_is_called(
            "commands.ingest",
            {"start": 50, "sources": ingest_sources, "outputDir": str(tmp_path)},
        )
        self.then_is_error()
        assert "start" in self.response.structured_content["error"]

    async def test_unknown_family_is_empty(self, tmp_path):
        await self.when_tool_is_called(
            "commands.getByFamily", {"family": "nope", "outputDir": str(tmp_path)}
        )
        self.then_is_success()
        assert self.response.structured_content["totalCount"] == 0


class TestListTools:
    def test_lists_every_tool_with_schema(self):
        tools = {t["name"]: t for t in list_tools()}

        assert set(tools) == set(TOOLS)
        assert set(tools) == {
            "api.extract",
            "api.findEquivalent",
            "api.search",
            "api.diff",
            "validate.glideSurface",
            "commands.ingest",
            "commands.listFamilies",
            "commands.getByFamily",
        }
        assert "sourceClient" in tools["api.diff"]["inputSchema"]["properties"]
