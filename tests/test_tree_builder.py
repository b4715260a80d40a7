# tests/test_tree_builder.py

from __future__ import annotations

import pytest

from conftree.core.exceptions import ConfSyntaxError, DepthLimitError, VersionError
from conftree.loader import build_tree, open_events
from conftree.tree import ConfNode

HEADER = "%YAML 1.1\n---\n"


def build(text: str, root: ConfNode | None = None, **kwargs) -> ConfNode:
    return build_tree(open_events(text), root, **kwargs)


def names(node: ConfNode) -> list:
    return [c.name for c in node.children]


def test_top_level_scalars_become_one_node_each() -> None:
    root = build(HEADER + "default-log-dir: /tmp\nmax-pending-packets: 1024\n")

    assert names(root) == ["default-log-dir", "max-pending-packets"]
    assert root.lookup_child("default-log-dir").value == "/tmp"
    assert root.lookup_child("max-pending-packets").value == "1024"
    assert all(c.is_leaf for c in root.children)


def test_sequence_entries_are_named_by_index() -> None:
    root = build(HEADER + "rule-files:\n  - a.rules\n  - b.rules\n")

    rule_files = root.lookup_child("rule-files")
    assert rule_files.value is None
    assert names(rule_files) == ["0", "1"]
    assert [c.value for c in rule_files.children] == ["a.rules", "b.rules"]
    assert not any(c.is_seq for c in rule_files.children)


def test_mapping_entries_in_sequence_become_indexed_containers() -> None:
    text = HEADER + (
        "outputs:\n"
        "  - interface: console\n"
        "    log-level: error\n"
        "  - interface: syslog\n"
        "    facility: local4\n"
    )
    root = build(text)

    outputs = root.lookup_child("outputs")
    first, second = outputs.children
    assert (first.name, second.name) == ("0", "1")
    assert first.is_seq and second.is_seq
    assert names(first) == ["interface", "log-level"]
    assert names(second) == ["interface", "facility"]
    assert second.lookup_child("facility").value == "local4"


def test_sequence_entry_takes_its_first_key_as_value() -> None:
    text = HEADER + (
        "outputs:\n"
        "  - fast:\n"
        "      enabled: yes\n"
        "  - eve-log:\n"
        "      enabled: no\n"
    )
    root = build(text)

    outputs = root.lookup_child("outputs")
    assert [c.value for c in outputs.children] == ["fast", "eve-log"]
    assert outputs.children[0].lookup_child("fast").lookup_child("enabled").value == "yes"


def test_only_the_first_key_is_borrowed() -> None:
    root = build(HEADER + "seq:\n  - {a: 1, b: 2}\n")

    entry = root.lookup_child("seq").lookup_child("0")
    assert entry.value == "a"
    assert names(entry) == ["a", "b"]


def test_nested_mapping_in_value_position_populates_the_key_node() -> None:
    root = build(HEADER + "logging:\n  default-log-level: info\n  nested:\n    deep: 1\n")

    logging_node = root.lookup_child("logging")
    assert names(root) == ["logging"]
    assert names(logging_node) == ["default-log-level", "nested"]
    assert logging_node.lookup_child("nested").lookup_child("deep").value == "1"


def test_second_level_sequence_with_flow_and_block_entries() -> None:
    text = HEADER + (
        "libhtp:\n"
        "  server-config:\n"
        "    - apache-php:\n"
        "        address: [\"192.168.1.0/24\"]\n"
        "        personality: [\"Apache_2_2\", \"PHP_5_3\"]\n"
        "    - iis-php:\n"
        "        address:\n"
        "          - 192.168.0.0/24\n"
    )
    root = build(text)

    server_config = root.lookup_child("libhtp").lookup_child("server-config")
    assert names(server_config) == ["0", "1"]

    apache = server_config.lookup_child("0").lookup_child("apache-php")
    address = apache.lookup_child("address").lookup_child("0")
    assert address.value == "192.168.1.0/24"
    assert [c.value for c in apache.lookup_child("personality").children] == [
        "Apache_2_2",
        "PHP_5_3",
    ]

    iis = server_config.lookup_child("1").lookup_child("iis-php")
    assert iis.lookup_child("address").lookup_child("0").value == "192.168.0.0/24"


def test_sequence_inside_sequence_gets_its_own_indexed_container() -> None:
    root = build(HEADER + "matrix:\n  - [a, b]\n  - [c]\n  - d\n")

    matrix = root.lookup_child("matrix")
    assert names(matrix) == ["0", "1", "2"]
    assert [c.value for c in matrix.lookup_child("0").children] == ["a", "b"]
    assert [c.value for c in matrix.lookup_child("1").children] == ["c"]
    assert matrix.lookup_child("2").value == "d"


def test_long_sequences_keep_counting() -> None:
    items = "".join(f"  - item{i}\n" for i in range(150))
    root = build(HEADER + "many:\n" + items)

    many = root.lookup_child("many")
    assert len(many.children) == 150
    assert many.children[-1].name == "149"
    assert many.children[-1].value == "item149"


def test_duplicate_key_in_one_document_replaces_earlier_subtree() -> None:
    root = build(HEADER + "a:\n  x: 1\nb: 2\na:\n  y: 3\n")

    a = root.lookup_child("a")
    assert names(root) == ["b", "a"]
    assert a.lookup_child("x") is None
    assert a.lookup_child("y").value == "3"


def test_second_build_into_same_root_overrides_top_level_key() -> None:
    root = build(HEADER + "vars:\n  home: 10.0.0.0/8\n  ext: any\nkeep: me\n")
    build(HEADER + "vars:\n  home: 192.168.0.0/16\n", root)

    vars_node = root.lookup_child("vars")
    assert names(vars_node) == ["home"]
    assert vars_node.lookup_child("home").value == "192.168.0.0/16"
    assert root.lookup_child("keep").value == "me"


def test_final_scalar_is_kept_and_its_replacement_value_dropped() -> None:
    root = ConfNode(name="")
    root.add_child(ConfNode(name="a", value="locked", allow_override=False))
    build(HEADER + "before: 1\na: changed\nafter: 2\n", root)

    assert root.lookup_child("a").value == "locked"
    assert root.lookup_child("before").value == "1"
    assert root.lookup_child("after").value == "2"
    assert [c.name for c in root.children].count("a") == 1


def test_final_node_skips_nested_replacement_structure() -> None:
    root = ConfNode(name="")
    final = root.add_child(ConfNode(name="a", allow_override=False))
    final.add_child(ConfNode(name="x", value="1"))
    build(HEADER + "a:\n  y: 2\n  list: [1, 2]\nb:\n  - c\n", root)

    assert names(final) == ["x"]
    assert root.lookup_child("b").lookup_child("0").value == "c"


def test_version_error_happens_before_any_mutation() -> None:
    root = ConfNode(name="")
    with pytest.raises(VersionError):
        build("%YAML 1.2\n---\nlogging:\n  level: info\n", root)
    assert root.children == []


def test_missing_version_directive_is_rejected() -> None:
    with pytest.raises(VersionError):
        build("logging:\n  level: info\n")


def test_empty_stream_is_rejected() -> None:
    with pytest.raises(VersionError):
        build("")


def test_required_version_can_be_changed() -> None:
    root = build("%YAML 1.2\n---\na: 1\n", required_version=(1, 2))
    assert root.lookup_child("a").value == "1"


def test_syntax_error_carries_position() -> None:
    with pytest.raises(ConfSyntaxError) as info:
        build(HEADER + "a: [1, 2\nb: 3\n")
    assert info.value.line is not None
    assert info.value.problem


def test_depth_limit() -> None:
    text = HEADER + "a:\n  b:\n    c: 1\n"

    with pytest.raises(DepthLimitError) as info:
        build(text, max_depth=2)
    assert info.value.max_depth == 2

    root = build(text, max_depth=3)
    assert root.lookup_child("a").lookup_child("b").lookup_child("c").value == "1"


def test_aliases_are_dropped_without_shifting_keys() -> None:
    root = build(HEADER + "a: &shared 1\nb: *shared\nc: 3\n")

    assert root.lookup_child("a").value == "1"
    assert root.lookup_child("b").value is None
    assert root.lookup_child("c").value == "3"
