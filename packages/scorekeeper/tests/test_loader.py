from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from scorekeeper.loader import load_rules_from_yaml


def test_load_rules_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text(
        """
rules:
  - code: coffee
    desc: made coffee
    points: 5
  - code: tests_added
    desc: added a unit test
    points: 2
""",
        encoding="utf-8",
    )

    rules = load_rules_from_yaml(path)

    assert [r.code for r in rules] == ["coffee", "tests_added"]
    assert rules[0].description == "made coffee"


def test_load_rules_list_root(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("- {code: coffee, points: 1}\n", encoding="utf-8")

    assert load_rules_from_yaml(path)[0].points == 1


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_rules_from_yaml("does-not-exist.yaml")


def test_scalar_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("just text", encoding="utf-8")

    with pytest.raises(ValueError):
        load_rules_from_yaml(path)


def test_invalid_rule_raises(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("rules:\n  - code: coffee\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_rules_from_yaml(path)
