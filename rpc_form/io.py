"""Input utilities for reading form values from JSON and JSONL files."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any


def read_jsonl(path: Path | str) -> Iterator[Any]:
    """Yield the form values stored one per line in a JSONL file.

    Blank lines are skipped.

    Raises:
        ValueError: If a line is not valid JSON; the message names the
            file and line number.
    """
    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            text = line.strip()
            if text:
                try:
                    record = json.loads(text)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid form value on line {line_num} of {path}: {e.msg}") from e
                yield record


def read_json(path: Path | str) -> Any:
    """Read a JSON document."""
    with open(path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e


def read_form_values(path: Path | str) -> list[Any]:
    """Read form values from a ``.jsonl`` file or a ``.json`` file.

    A JSON file may hold a single value or a list of values.
    """
    path = Path(path)
    if path.suffix == ".jsonl":
        return list(read_jsonl(path))
    data = read_json(path)
    if isinstance(data, list):
        return data
    return [data]
