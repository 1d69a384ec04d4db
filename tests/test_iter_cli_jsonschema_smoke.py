from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from sunlark import iter_cli

REPO_ROOT = Path(__file__).resolve().parents[1]
SCHEMA_PATH = REPO_ROOT / "docs" / "schemas" / "iter_run_schema.json"


def _schema():
    assert SCHEMA_PATH.exists(), f"missing schema: {SCHEMA_PATH}"
    return json.loads(SCHEMA_PATH.read_text())


@pytest.mark.parametrize("argv,code", [
    (["count", "--take", "3"], 0),
    (["count", "2", "0.25", "--take", "3", "--pretty"], 0),
    (["count", "--take", "3", "--freeze-after", "1"], 0),
    (["map", "pair", "[1,2]", "[\"a\",\"b\"]"], 0),
    (["map", "square", "[]"], 0),
    (["map", "neg", "[\"x\"]"], 1),
])
def test_iter_cli_output_validates(capsys, argv, code):
    assert iter_cli.main(argv) == code
    data = json.loads(capsys.readouterr().out)
    jsonschema.validate(instance=data, schema=_schema())


def test_schema_doc_exists():
    assert (REPO_ROOT / iter_cli.SCHEMA_DOC).exists()


def test_pair_output_is_json_lists(capsys):
    assert iter_cli.main(["map", "pair", "[1,2]", "[3,4]"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["output"] == [[1, 3], [2, 4]]


def test_float_overflow_renders_as_strings(capsys):
    assert iter_cli.main(["count", "1e308", "1e308", "--take", "3"]) == 0
    text = capsys.readouterr().out
    data = json.loads(text)
    jsonschema.validate(instance=data, schema=_schema())
    assert data["output"] == [1e308, "inf", "inf"]
    assert "Infinity" not in text
