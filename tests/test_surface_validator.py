"""Tests for validating mapping datasets against an extracted GLIDE surface."""

import json

from glide_compat.mappings import all_datasets
from glide_compat.models import ApiDataset, ApiMappingEntry
from glide_compat.surface_validator import (
    METHOD_LIST_PATH,
    REPORT_JSON_NAME,
    REPORT_MD_NAME,
    extract_method_candidates,
    extract_referenced_method_names,
    extract_surface,
    render_summary,
    validate,
    write_validation_artifacts,
)

BASIC_DATASET = ApiDataset(
    client="ioredis",
    entries=(
        ApiMappingEntry("strings", "get(key)", "get(key)", "Get."),
        ApiMappingEntry("strings", "set(key, value)", "set(key, value, options?)", "Set."),
        ApiMappingEntry("keys", "del(key|keys)", "del(...keys)", "Delete."),
    ),
)


class TestExtractMethodCandidates:
    def test_finds_lower_camel_case_calls(self):
        source = "async xgroupCreate(key) { return this.createWritePromise(cmd); }"

        assert extract_method_candidates(source) == {"xgroupCreate", "createWritePromise"}

    def test_excludes_keywords(self):
        source = "if (x) { for (;;) {} while (y) {} return foo(1); } function bar() {}"

        assert extract_method_candidates(source) == {"foo", "bar"}

    def test_excludes_capitalized_identifiers(self):
        source = "new Batch(true); GlideClient(options); exec(batch)"

        assert extract_method_candidates(source) == {"exec"}

    def test_exported_function_keeps_its_case(self):
        assert extract_method_candidates("export function sAdd(){}") == {"sAdd"}

    def test_accepts_invalid_source(self):
        assert extract_method_candidates("}{ get( ((( set (") == {"get", "set"}

    def test_surface_is_union_of_sources(self):
        assert extract_surface(["get(a)", "set(b)", "get(c)"]) == {"get", "set"}


class TestExtractReferencedMethodNames:
    def test_keeps_first_appearance_order_without_duplicates(self):
        entry = ApiMappingEntry("pubsub", "s", "customCommand(a) + getPubSubMessage() | customCommand(b)", "")

        assert extract_referenced_method_names(entry) == ["customCommand", "getPubSubMessage"]

    def test_reads_qualified_calls(self):
        entry = ApiMappingEntry("json", "s", "GlideJson.set(client, key, path, value)", "")

        assert extract_referenced_method_names(entry) == ["set"]

    def test_text_without_calls_references_nothing(self):
        entry = ApiMappingEntry("keys", "s", "ttl | persist", "")

        assert extract_referenced_method_names(entry) == []


class TestValidate:
    def given_surface(self, *names):
        self.surface = set(names)

    def when_validated(self, *datasets):
        self.report = validate(datasets or [BASIC_DATASET], self.surface)

    def then_validated_count_is(self, count):
        assert self.report.validated_count == count

    def then_entry(self, symbol):
        return next(r for r in self.report.results if r.symbol == symbol)

    def test_full_surface_validates_everything(self):
        self.given_surface("get", "set", "del")
        self.when_validated()
        self.then_validated_count_is(3)
        assert self.report.total_entries == 3
        assert self.report.extracted_method_count == 3

    def test_removed_method_flips_entry(self):
        """Removing a method from the surface unvalidates entries that use it."""
        self.given_surface("get", "set")
        self.when_validated()
        self.then_validated_count_is(2)
        result = self.then_entry("del(key|keys)")
        assert not result.validated
        assert result.missing == ["del"]

    def test_comparison_is_case_sensitive(self):
        dataset = ApiDataset(
            client="node-redis",
            entries=(ApiMappingEntry("sets", "sAdd(key, members)", "sadd(key, members)", ""),),
        )
        self.given_surface(*extract_method_candidates("export function sAdd(){}"))
        self.when_validated(dataset)
        self.then_validated_count_is(0)
        assert self.then_entry("sAdd(key, members)").missing == ["sadd"]

    def test_entry_without_references_is_not_validated(self):
        dataset = ApiDataset(
            client="node-redis",
            entries=(ApiMappingEntry("keys", "ttl(key)", "ttl | persist", ""),),
        )
        self.given_surface("ttl", "persist")
        self.when_validated(dataset)
        result = self.then_entry("ttl(key)")
        assert not result.validated
        assert result.missing == []

    def test_covers_every_curated_entry(self):
        self.given_surface()
        self.when_validated(*all_datasets())
        assert self.report.total_entries == sum(len(d) for d in all_datasets())
        self.then_validated_count_is(0)


class TestWriteValidationArtifacts:
    def test_writes_all_artifacts(self, tmp_path):
        report = validate([BASIC_DATASET], {"set", "get"})

        written = write_validation_artifacts(report, tmp_path)

        assert written == [
            tmp_path / REPORT_JSON_NAME,
            tmp_path / REPORT_MD_NAME,
            tmp_path / METHOD_LIST_PATH,
        ]
        assert json.loads((tmp_path / REPORT_JSON_NAME).read_text())["validatedCount"] == 2
        assert json.loads((tmp_path / METHOD_LIST_PATH).read_text()) == {"methods": ["get", "set"]}
        assert "del(key|keys)" in (tmp_path / REPORT_MD_NAME).read_text()

    def test_rewriting_is_byte_identical(self, tmp_path):
        report = validate([BASIC_DATASET], {"get"})

        write_validation_artifacts(report, tmp_path)
        first = [p.read_bytes() for p in sorted(tmp_path.rglob("*.json"))]
        write_validation_artifacts(report, tmp_path)
        second = [p.read_bytes() for p in sorted(tmp_path.rglob("*.json"))]

        assert first == second

    def test_summary_is_truncated_at_limit(self):
        report = validate([BASIC_DATASET], set())

        summary = render_summary(report, limit=1)

        assert "- get(key) -> get (missing: get)" in summary
        assert "set(key, value)" not in summary
        assert "... and 2 more" in summary
