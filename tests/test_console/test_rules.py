"""Tests for consolegen.console.rules.

Each rule is exercised through :func:`translate_command`, so these tests
cover both the recognising pattern (selection order) and the renderer.
"""

from __future__ import annotations

import pytest

from consolegen.console.rules import RULES, TranslateRule
from consolegen.console.translator import find_rule, translate_command
from consolegen.exceptions import BodyFormatError, ExtractionMismatch, NoRuleError


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_order(self) -> None:
        assert [r.name for r in RULES] == [
            "Info",
            "Cat.Health",
            "Cluster.PutSettings",
            "Index",
            "Indices.Create",
            "Get",
            "Exists",
            "Delete",
            "Search",
        ]

    def test_is_immutable(self) -> None:
        assert isinstance(RULES, tuple)
        assert all(isinstance(r, TranslateRule) for r in RULES)

    @pytest.mark.parametrize(
        ("text", "name"),
        [
            ("GET /\n", "Info"),
            ("GET /_cat/health?v\n", "Cat.Health"),
            ('PUT /_cluster/settings\n{"persistent": {}}\n', "Cluster.PutSettings"),
            ('PUT /bank/_doc/1\n{"a": 1}\n', "Index"),
            ('POST /bank/_doc\n{"a": 1}\n', "Index"),
            ("PUT /customer\n", "Indices.Create"),
            ("GET /twitter/_doc/0\n", "Get"),
            ("GET /twitter/_source/0\n", "Get"),
            ("HEAD /twitter/_doc/0\n", "Exists"),
            ("DELETE /twitter/_doc/1\n", "Delete"),
            ("GET /_search\n", "Search"),
            ("GET /bank/_search?q=*\n", "Search"),
        ],
    )
    def test_first_match(self, text: str, name: str) -> None:
        selected = find_rule(text)
        assert selected is not None
        assert selected.name == name

    @pytest.mark.parametrize(
        "text",
        [
            "GET /_cluster/health\n",
            'POST /bank/_bulk\n{"index": {}}\n',
            "GET /twitter/_searchable\n",
            "DELETE /twitter\n",
        ],
    )
    def test_no_rule(self, text: str) -> None:
        assert find_rule(text) is None
        with pytest.raises(NoRuleError, match="no rule to translate"):
            translate_command(text)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


class TestInfo:
    def test_root(self) -> None:
        assert translate_command("GET /\n") == "\tres, err := es.Info()"

    def test_trailing_whitespace(self) -> None:
        assert translate_command("GET /   \n") == "\tres, err := es.Info()"


class TestCatHealth:
    def test_verbose(self) -> None:
        assert translate_command("GET /_cat/health?v\n") == (
            "\tres, err := es.Cat.Health(es.Cat.Health.WithV(true))"
        )


class TestClusterPutSettings:
    def test_body(self) -> None:
        text = 'PUT /_cluster/settings\n{"transient": {"indices.recovery.max_bytes_per_sec": "20mb"}}\n'
        assert translate_command(text) == (
            "\tres, err := es.Cluster.PutSettings(\n"
            "\t\tstrings.NewReader(`{\n"
            '\t\t  "transient": {\n'
            '\t\t    "indices.recovery.max_bytes_per_sec": "20mb"\n'
            "\t\t  }\n"
            "\t\t}`),\n"
            "\t)"
        )

    def test_params(self) -> None:
        text = 'PUT _cluster/settings?flat_settings=true\n{"persistent": {}}\n'
        assert '\t\tes.Cluster.PutSettings.WithFlatSettings("true"),\n' in translate_command(text)

    def test_missing_body(self) -> None:
        with pytest.raises(ExtractionMismatch, match="cannot match example source"):
            translate_command("PUT /_cluster/settings\n")


class TestIndex:
    def test_with_id(self) -> None:
        text = 'PUT /bank/_doc/1\n{"name": "John"}\n'
        assert translate_command(text) == (
            "\tres, err := es.Index(\n"
            '\t\t"bank",\n'
            "\t\tstrings.NewReader(`{\n"
            '\t\t  "name": "John"\n'
            "\t\t}`),\n"
            '\t\tes.Index.WithDocumentID("1"),\n'
            "\t\tes.Index.WithPretty(),\n"
            "\t)"
        )

    def test_without_id(self) -> None:
        result = translate_command('POST twitter/_doc/\n{"user": "kimchy"}\n')
        assert result.startswith('\tres, err := es.Index(\n\t\t"twitter",\n')
        assert "WithDocumentID" not in result

    def test_params_sorted_and_pretty_not_repeated(self) -> None:
        result = translate_command('PUT twitter/_doc/1?pretty&routing=kimchy&op_type=create\n{"a": 1}\n')
        assert result.endswith(
            '\t\tes.Index.WithDocumentID("1"),\n'
            '\t\tes.Index.WithOpType("create"),\n'
            '\t\tes.Index.WithRouting("kimchy"),\n'
            "\t\tes.Index.WithPretty(),\n"
            "\t)"
        )
        assert result.count("WithPretty") == 1

    def test_create(self) -> None:
        assert translate_command('PUT twitter/_create/1\n{"a": 1}\n') == (
            "\tres, err := es.Create(\n"
            '\t\t"twitter",\n'
            '\t\t"1",\n'
            "\t\tstrings.NewReader(`{\n"
            '\t\t  "a": 1\n'
            "\t\t}`),\n"
            "\t\tes.Create.WithPretty(),\n"
            "\t)"
        )

    def test_create_requires_id(self) -> None:
        with pytest.raises(ExtractionMismatch, match="document ID required"):
            translate_command('PUT twitter/_create\n{"a": 1}\n')

    def test_malformed_body(self) -> None:
        with pytest.raises(BodyFormatError):
            translate_command("PUT /bank/_doc/1\n{bad json}\n")

    def test_missing_body(self) -> None:
        with pytest.raises(ExtractionMismatch):
            translate_command("PUT /bank/_doc/1\n")


class TestIndicesCreate:
    def test_bare(self) -> None:
        assert translate_command("PUT /customer\n") == (
            '\tres, err := es.Indices.Create("customer")'
        )

    def test_trailing_slash(self) -> None:
        assert translate_command("PUT twitter/\n") == '\tres, err := es.Indices.Create("twitter")'

    def test_body_and_params(self) -> None:
        text = 'PUT /twitter?wait_for_active_shards=2\n{"settings": {"number_of_shards": 3}}\n'
        assert translate_command(text) == (
            "\tres, err := es.Indices.Create(\n"
            '\t\t"twitter",\n'
            "\t\tes.Indices.Create.WithBody(strings.NewReader(`{\n"
            '\t\t  "settings": {\n'
            '\t\t    "number_of_shards": 3\n'
            "\t\t  }\n"
            "\t\t}`)),\n"
            '\t\tes.Indices.Create.WithWaitForActiveShards("2"),\n'
            "\t)"
        )


class TestGet:
    def test_single_line(self) -> None:
        assert translate_command("GET twitter/_doc/0\n") == (
            '\tres, err := es.Get("twitter", "0", es.Get.WithPretty())'
        )

    def test_source(self) -> None:
        assert translate_command("GET twitter/_source/1\n") == (
            '\tres, err := es.GetSource("twitter", "1", es.GetSource.WithPretty())'
        )

    def test_params(self) -> None:
        assert translate_command("GET twitter/_doc/0?_source=false\n") == (
            "\tres, err := es.Get(\n"
            '\t\t"twitter",\n'
            '\t\t"0",\n'
            '\t\tes.Get.WithSource("false"),\n'
            "\t\tes.Get.WithPretty(),\n"
            "\t)"
        )

    def test_body_not_allowed(self) -> None:
        with pytest.raises(ExtractionMismatch):
            translate_command('GET twitter/_doc/0\n{"a": 1}\n')


class TestExists:
    def test_uses_document_id(self) -> None:
        assert translate_command("HEAD twitter/_doc/0\n") == (
            '\tres, err := es.Exists("twitter", "0", es.Exists.WithPretty())'
        )

    def test_source(self) -> None:
        assert translate_command("HEAD twitter/_source/1\n") == (
            '\tres, err := es.ExistsSource("twitter", "1", es.ExistsSource.WithPretty())'
        )


class TestDelete:
    def test_single_line(self) -> None:
        assert translate_command("DELETE /twitter/_doc/1\n") == (
            '\tres, err := es.Delete("twitter", "1", es.Delete.WithPretty())'
        )

    def test_timeout(self) -> None:
        assert translate_command("DELETE /twitter/_doc/1?timeout=5s\n") == (
            "\tres, err := es.Delete(\n"
            '\t\t"twitter",\n'
            '\t\t"1",\n'
            "\t\tes.Delete.WithTimeout(time.Duration(5000000000)),\n"
            "\t\tes.Delete.WithPretty(),\n"
            "\t)"
        )


class TestSearch:
    def test_query_string(self) -> None:
        assert translate_command("GET /_search?q=user:kimchy\n") == (
            "\tres, err := es.Search(\n"
            '\t\tes.Search.WithQuery("user:kimchy"),\n'
            "\t\tes.Search.WithPretty(),\n"
            "\t)"
        )

    def test_index_list(self) -> None:
        result = translate_command("GET /twitter,kimchy/_search\n")
        assert '\t\tes.Search.WithIndex("twitter", "kimchy"),\n' in result

    def test_body(self) -> None:
        text = 'GET /bank/_search\n{\n  "query": { "match_all": {} }\n}\n'
        assert translate_command(text) == (
            "\tres, err := es.Search(\n"
            '\t\tes.Search.WithIndex("bank"),\n'
            "\t\tes.Search.WithBody(strings.NewReader(`{\n"
            '\t\t  "query": {\n'
            '\t\t    "match_all": {}\n'
            "\t\t  }\n"
            "\t\t}`)),\n"
            "\t\tes.Search.WithPretty(),\n"
            "\t)"
        )

    def test_numeric_params(self) -> None:
        result = translate_command("GET /_search?size=5&from=10\n")
        assert "\t\tes.Search.WithFrom(10),\n\t\tes.Search.WithSize(5),\n" in result
