"""Tests for output formatting of API data."""

import json

from xcsh.domain.types import OutputFormat
from xcsh.output.console import style_for_status
from xcsh.output.formatters import (
    OUTPUT_FORMATS_NOTE,
    extract_items,
    format_domain_overview,
    format_labels,
    format_output,
    format_table,
    format_tsv,
    format_yaml,
)

LIST_RESPONSE = {
    "items": [
        {"name": "lb1", "namespace": "prod", "labels": {"team": "web", "env": "prod"}},
        {"name": "lb2", "namespace": "prod"},
    ]
}


class TestExtractItems:
    def test_items_key(self) -> None:
        assert [i["name"] for i in extract_items(LIST_RESPONSE)] == ["lb1", "lb2"]

    def test_plain_list_skips_scalars(self) -> None:
        assert extract_items([{"a": 1}, "x", 3]) == [{"a": 1}]

    def test_single_object(self) -> None:
        assert extract_items({"name": "one"}) == [{"name": "one"}]

    def test_scalar(self) -> None:
        assert extract_items("nope") == []


class TestLabels:
    def test_sorted_map(self) -> None:
        assert format_labels(LIST_RESPONSE["items"][0]) == "map[env:prod team:web]"

    def test_missing(self) -> None:
        assert format_labels({"name": "x"}) == ""


class TestFormatOutput:
    def test_json(self) -> None:
        out = format_output(LIST_RESPONSE, OutputFormat.JSON)
        assert json.loads(out) == LIST_RESPONSE

    def test_yaml(self) -> None:
        out = format_output({"name": "lb1", "spec": {"port": 80}}, OutputFormat.YAML)
        assert "name: lb1" in out
        assert "spec:" in out
        assert "  port: 80" in out

    def test_yaml_stringifies_unknown_types(self) -> None:
        out = format_yaml({"when": object()})
        assert out.startswith("when:")

    def test_none_renders_nothing(self) -> None:
        assert format_output(LIST_RESPONSE, OutputFormat.NONE) == ""

    def test_text_uses_table(self) -> None:
        text = format_output(LIST_RESPONSE, OutputFormat.TEXT, no_color=True)
        assert text == format_output(LIST_RESPONSE, OutputFormat.TABLE, no_color=True)


class TestFormatTable:
    def test_resource_columns(self) -> None:
        out = format_table(LIST_RESPONSE, no_color=True)
        assert "NAMESPACE" in out
        assert "NAME" in out
        assert "LABELS" in out
        assert "lb1" in out
        assert "map[env:prod team:web]" in out
        assert "<None>" in out

    def test_metadata_fallback(self) -> None:
        out = format_table({"items": [{"metadata": {"name": "meta-lb", "namespace": "dev"}}]}, no_color=True)
        assert "meta-lb" in out
        assert "dev" in out

    def test_key_value_for_single_object(self) -> None:
        out = format_table({"tier": "Standard", "state": "active"}, no_color=True)
        assert "KEY" in out
        assert "VALUE" in out
        assert "Standard" in out

    def test_explicit_columns(self) -> None:
        out = format_table([{"name": "a", "status": "ACTIVE"}], columns=["name", "status"], no_color=True)
        assert "STATUS" in out
        assert "ACTIVE" in out
        assert "<None>" not in out

    def test_empty(self) -> None:
        assert format_table({"items": []}) == ""


class TestFormatTsv:
    def test_priority_then_sorted(self) -> None:
        data = [{"zeta": 1, "namespace": "prod", "name": "a", "alpha": 2}]
        assert format_tsv(data) == "a\tprod\t2\t1"

    def test_explicit_columns_and_nested(self) -> None:
        data = [{"name": "a", "spec": {"port": 80}}]
        assert format_tsv(data, columns=["name", "spec", "missing"]) == 'a\t{"port":80}\t'

    def test_empty(self) -> None:
        assert format_tsv([]) == ""


class TestDomainOverview:
    def test_sections(self) -> None:
        lines = format_domain_overview(
            "dns",
            "DNS zones",
            [("list", "List zones"), ("get", "Get a zone")],
            examples=["dns list"],
            supports_output_formats=True,
            notes=["Note: preview"],
        )
        assert lines[1] == "dns - DNS zones"
        assert "Commands:" in lines
        assert "  list   List zones" in lines
        assert "  dns list" in lines
        assert OUTPUT_FORMATS_NOTE in lines
        assert "Note: preview" in lines

    def test_minimal(self) -> None:
        assert format_domain_overview("x", "desc", []) == ["", "x - desc", ""]


class TestStatusStyles:
    def test_known(self) -> None:
        assert style_for_status("active") == "xcsh.ok"
        assert style_for_status("EXCEEDED") == "xcsh.error"

    def test_unknown(self) -> None:
        assert style_for_status("pending") == ""
