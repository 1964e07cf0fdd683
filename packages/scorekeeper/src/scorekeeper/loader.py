"""Loading rule definitions from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from .models import Rule


def load_rules_from_yaml(path: str | Path) -> list[Rule]:
    """Reads rules from a YAML file.

    The root is either a list of rule mappings or a mapping with a ``rules``
    list, e.g.::

        rules:
          - code: coffee
            desc: made coffee
            points: 5

    Raises:
        FileNotFoundError: If the file is missing.
        ValueError: If the root has another shape.
        pydantic.ValidationError: If an entry is not a valid rule.
    """

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Rules file not found: {file_path}")

    data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("rules")
    if not isinstance(data, list):
        raise ValueError("Rules file must contain a list of rules or a 'rules' list")

    return [Rule.model_validate(entry) for entry in data]
