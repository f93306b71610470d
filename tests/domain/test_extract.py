"""Tests for YAML loading, typed accessors, and traversal helpers."""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from pathlib import Path
from typing import IO, Any

import pytest

from yamlmenu.domain.errors import MissingKeyError, ParseError, TypeMismatchError, YamlMenuError
from yamlmenu.domain.extract import (
    as_mapping,
    as_scalar,
    as_sequence,
    document_root,
    find_child,
    get_child,
    get_optional_string,
    get_string,
    load,
    load_all,
    load_file,
    load_string,
    map_mapping,
    map_sequence,
    to_string,
)
from yamlmenu.domain.nodes import MappingNode, ScalarNode, SequenceNode
from yamlmenu.domain.sample import SAMPLE_YAML


class TestLoad:
    def test_sample_root_is_mapping_in_document_order(self) -> None:
        root = load_string(SAMPLE_YAML)
        assert isinstance(root, MappingNode)
        assert root.keys() == ["version", "menu", "start_commands"]

    def test_scalar_text_is_preserved_verbatim(self) -> None:
        root = load_string("version: 3.10\nflag: yes\n")
        assert to_string(get_child("version", root)) == "3.10"
        assert to_string(get_child("flag", root)) == "yes"

    def test_load_accepts_text_stream(self) -> None:
        root = load(StringIO("version: 1\n"))
        assert get_optional_string("version", root) == "1"

    def test_malformed_yaml(self) -> None:
        with pytest.raises(ParseError, match="Malformed YAML"):
            load_string("menu: [item 1, item 2\n")

    def test_empty_input(self) -> None:
        with pytest.raises(ParseError, match="no document"):
            load_string("")

    def test_root_must_be_mapping(self) -> None:
        with pytest.raises(ParseError, match="root must be a mapping"):
            load_string("- a\n- b\n")

    def test_scalar_root_rejected(self) -> None:
        with pytest.raises(ParseError):
            load_string("just text\n")

    def test_duplicate_keys_rejected(self) -> None:
        with pytest.raises(ParseError, match="Duplicate mapping key 'a'"):
            load_string("a: 1\na: 2\n")

    def test_non_scalar_key_rejected(self) -> None:
        with pytest.raises(ParseError, match="keys must be scalars"):
            load_string("? [a, b]\n: value\n")

    def test_first_document_is_returned(self) -> None:
        root = load_string("version: 1\n---\nversion: 2\n")
        assert get_optional_string("version", root) == "1"

    def test_parse_error_is_a_yamlmenu_error(self) -> None:
        with pytest.raises(YamlMenuError):
            load_string("a: b: c\n")

    def test_recursive_sequence_alias(self) -> None:
        with pytest.raises(ParseError, match="Recursive alias"):
            load_string("a: &x [1, *x]\n")

    def test_recursive_mapping_alias(self) -> None:
        with pytest.raises(ParseError, match="Recursive alias"):
            load_string("a: &m\n  self: *m\n")

    def test_repeated_aliases_share_one_converted_node(self) -> None:
        lines = ["l0: &l0 [x]"]
        for depth in range(1, 9):
            refs = ", ".join([f"*l{depth - 1}"] * 10)
            lines.append(f"l{depth}: &l{depth} [{refs}]")
        root = load_string("\n".join(lines) + "\n")
        top = as_sequence(get_child("l8", root))
        assert len(top) == 10
        assert top.items[0] is top.items[9]
        assert top.items[0] is get_child("l7", root)

    def test_deep_nesting_is_parse_error(self) -> None:
        with pytest.raises(ParseError):
            load_string("a: " + "[" * 5000 + "]" * 5000 + "\n")

    def test_keys_with_same_text_collide_whatever_the_tag(self) -> None:
        with pytest.raises(ParseError, match="compared by text"):
            load_string("1: a\n'1': b\n")

    def test_load_all_returns_every_document(self) -> None:
        documents = load_all("version: 1\n---\n- a\n")
        assert [doc.kind for doc in documents] == ["mapping", "sequence"]
        assert get_optional_string("version", document_root(documents)) == "1"

    def test_document_root_of_empty_stream(self) -> None:
        with pytest.raises(ParseError, match="no document"):
            document_root(load_all(""))


class TestLoadFile:
    def test_reads_file(self, sample_file: Path) -> None:
        root = load_file(sample_file)
        assert get_optional_string("version", root) == "3.4"

    def test_accepts_str_path(self, sample_file: Path) -> None:
        root = load_file(str(sample_file))
        assert "menu" in root.keys()

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_file(tmp_path / "absent.yml")

    def test_parse_failure_in_file(self, write_yaml: Callable[..., Path]) -> None:
        path = write_yaml("version: [\n")
        with pytest.raises(ParseError):
            load_file(path)

    @pytest.mark.parametrize(
        ("content", "fails"),
        [("version: 1\n", False), ("version: [\n", True), ("a: &x [*x]\n", True)],
    )
    def test_handle_is_closed_on_every_exit(
        self,
        write_yaml: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
        content: str,
        fails: bool,
    ) -> None:
        path = write_yaml(content)
        opened: list[IO[str]] = []
        real_open = Path.open

        def recording_open(self: Path, *args: Any, **kwargs: Any) -> IO[str]:
            fh = real_open(self, *args, **kwargs)
            opened.append(fh)
            return fh

        monkeypatch.setattr(Path, "open", recording_open)
        if fails:
            with pytest.raises(ParseError):
                load_file(path)
        else:
            load_file(path)
        assert len(opened) == 1
        assert opened[0].closed


class TestCasts:
    def test_as_scalar(self) -> None:
        node = ScalarNode("x")
        assert as_scalar(node) is node

    def test_as_sequence_rejects_mapping(self) -> None:
        with pytest.raises(TypeMismatchError, match="Expected a sequence node, got a mapping node"):
            as_sequence(MappingNode())

    def test_as_mapping_rejects_scalar(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            as_mapping(ScalarNode("x"))
        assert exc_info.value.expected == "mapping"
        assert exc_info.value.actual == "scalar"

    def test_mismatch_reports_line(self) -> None:
        root = load_string("menu:\n  a: b\n")
        with pytest.raises(TypeMismatchError) as exc_info:
            as_sequence(get_child("menu", root))
        assert exc_info.value.line == 2

    def test_to_string_rejects_sequence(self) -> None:
        with pytest.raises(TypeMismatchError):
            to_string(SequenceNode(items=(ScalarNode("a"),)))


class TestLookup:
    def test_get_child(self) -> None:
        root = load_string(SAMPLE_YAML)
        menu = get_child("menu", root)
        assert isinstance(menu, SequenceNode)
        assert len(menu) == 4

    def test_get_child_missing(self) -> None:
        root = load_string("version: 1\n")
        with pytest.raises(MissingKeyError) as exc_info:
            get_child("menu", root)
        assert exc_info.value.key == "menu"
        assert "menu" in str(exc_info.value)

    def test_missing_key_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_child("absent", MappingNode())

    def test_get_child_on_non_mapping(self) -> None:
        with pytest.raises(TypeMismatchError):
            get_child("x", ScalarNode("x"))

    def test_find_child_returns_none_when_absent(self) -> None:
        assert find_child("nope", load_string("a: 1\n")) is None

    def test_optional_string_present(self) -> None:
        root = load_string("path: /tmp/x\n")
        assert get_optional_string("path", root) == "/tmp/x"

    def test_optional_string_absent(self) -> None:
        root = load_string("path: /tmp/x\n")
        assert get_optional_string("except", root) is None

    def test_optional_string_empty_value_is_not_absent(self) -> None:
        root = load_string("empty:\nquoted: ''\n")
        assert get_optional_string("empty", root) == ""
        assert get_optional_string("quoted", root) == ""

    @pytest.mark.parametrize(
        ("doc", "expected"),
        [
            ("except: aws-cli\n", "aws-cli"),
            ("other: x\n", "fallback"),
            ("except: ''\n", ""),
        ],
    )
    def test_get_string_substitutes_default_only_when_absent(self, doc: str, expected: str) -> None:
        root = load_string(doc)
        assert get_string("except", "fallback", root) == expected
        optional = get_optional_string("except", root)
        assert get_string("except", "fallback", root) == (
            "fallback" if optional is None else optional
        )


class TestTraversal:
    def test_map_sequence_passes_index_and_item(self) -> None:
        root = load_string("menu: [a, b, c]\n")
        pairs = list(map_sequence(lambda i, n: (i, to_string(n)), get_child("menu", root)))
        assert pairs == [(0, "a"), (1, "b"), (2, "c")]

    def test_map_sequence_is_lazy(self) -> None:
        calls: list[int] = []

        def record(index: int, _node: object) -> int:
            calls.append(index)
            return index

        mapped = map_sequence(record, load_string("m: [a, b]\n").entries[0][1])
        assert calls == []
        assert next(mapped) == 0
        assert calls == [0]

    def test_map_sequence_is_single_pass(self) -> None:
        mapped = map_sequence(lambda i, n: i, SequenceNode(items=(ScalarNode("a"),)))
        assert list(mapped) == [0]
        assert list(mapped) == []

    def test_map_sequence_checks_kind_eagerly(self) -> None:
        with pytest.raises(TypeMismatchError):
            map_sequence(lambda i, n: i, MappingNode())

    def test_map_mapping_preserves_document_order(self) -> None:
        root = load_string("zeta: 1\nalpha: 2\nmid: 3\n")
        keys = list(map_mapping(lambda k, v: k, root))
        assert keys == ["zeta", "alpha", "mid"]

    def test_map_mapping_one_result_per_entry(self) -> None:
        root = load_string(SAMPLE_YAML)
        commands = get_child("start_commands", root)
        results = list(map_mapping(lambda k, v: (k, get_optional_string("path", v)), commands))
        assert len(results) == len(commands)
        assert [k for k, _ in results] == ["start_infra", "check_status"]

    def test_map_mapping_checks_kind_eagerly(self) -> None:
        with pytest.raises(TypeMismatchError):
            map_mapping(lambda k, v: k, SequenceNode())
