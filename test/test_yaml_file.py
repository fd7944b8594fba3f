from __future__ import annotations

import pytest

from pyquarto.documents.yaml_file import dump_yaml, load_yaml, load_yaml_mapping, write_yaml_mapping
from pyquarto.errors import NotFoundError, ParseError


def test_on_key_stays_a_string():
    data = load_yaml("on:\n  push:\n    branches: [main]\n")
    assert list(data) == ["on"]
    assert "on:" in dump_yaml(data)
    assert "true:" not in dump_yaml(data)


def test_only_true_false_are_booleans():
    data = load_yaml("a: yes\nb: off\nc: true\nd: False\n")
    assert data == {"a": "yes", "b": "off", "c": True, "d": False}


def test_dump_keeps_order_and_indents_sequences():
    text = dump_yaml({"z": 1, "a": {"items": ["x", "y"]}})
    assert text == "z: 1\na:\n  items:\n    - x\n    - y\n"


def test_empty_mapping_dumps_to_nothing():
    assert dump_yaml({}) == ""


def test_load_mapping_errors(tmp_path):
    with pytest.raises(NotFoundError):
        load_yaml_mapping(tmp_path / "missing.yml")
    assert load_yaml_mapping(tmp_path / "missing.yml", missing_ok=True) == {}

    p = tmp_path / "list.yml"
    p.write_text("- a\n- b\n")
    with pytest.raises(ParseError):
        load_yaml_mapping(p)


def test_write_then_load(tmp_path):
    p = tmp_path / "sub" / "_quarto.yml"
    write_yaml_mapping(p, {"project": {"type": "website"}})
    assert load_yaml_mapping(p) == {"project": {"type": "website"}}
