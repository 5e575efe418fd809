from __future__ import annotations

import json
from pathlib import Path

import pytest

from homepulse.document import LIGHT_IDS, default_document
from homepulse.exceptions import StoreWriteError
from homepulse.store import JsonStore


def test_load_missing_file_returns_defaults(data_file: Path) -> None:
    doc = JsonStore(data_file).load()

    assert doc == default_document()
    assert not data_file.exists()


@pytest.mark.parametrize("raw", ["{not json", "", "[1, 2, 3]", "42"])
def test_load_corrupt_file_returns_defaults(data_file: Path, raw: str) -> None:
    data_file.write_text(raw, encoding="utf-8")

    doc = JsonStore(data_file).load()

    assert doc["temperature"]["current"] == 22.0
    assert doc["humidity"]["current"] == 50.0
    assert set(doc["lights"]) == set(LIGHT_IDS)


def test_save_then_load_returns_whole_document(data_file: Path) -> None:
    store = JsonStore(data_file)
    doc = default_document()
    doc["lights"]["3"] = {"state": True, "timerStart": 1234, "history": [{"timestamp": 1234, "state": True}]}
    doc["humidity"] = {"current": 51.5, "history": [{"timestamp": 99, "value": 51.5}]}

    store.save(doc)

    assert store.load() == doc
    assert json.loads(data_file.read_text(encoding="utf-8")) == doc


def test_save_overwrites_and_leaves_no_temp_files(data_file: Path) -> None:
    store = JsonStore(data_file)
    first = default_document()
    second = default_document()
    second["temperature"]["current"] = 23.4

    store.save(first)
    store.save(second)

    assert store.load()["temperature"]["current"] == 23.4
    assert [p.name for p in data_file.parent.iterdir()] == [data_file.name]


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "data.json"

    JsonStore(path).save(default_document())

    assert path.exists()


def test_save_unwritable_location_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file", encoding="utf-8")
    store = JsonStore(blocker / "data.json")

    with pytest.raises(StoreWriteError) as excinfo:
        store.save(default_document())

    assert str(blocker / "data.json") in str(excinfo.value)


def _without(path: str) -> dict:
    doc = default_document()
    *parents, leaf = path.split(".")
    node = doc
    for p in parents:
        node = node[p]
    del node[leaf]
    return doc


@pytest.mark.parametrize(
    "doc",
    [
        {},
        {"lights": {}},
        _without("humidity"),
        _without("lights.6"),
        _without("lights.2.timerStart"),
        _without("gasSensor.history"),
        _without("temperature.current"),
        {**default_document(), "lights": ["not", "a", "mapping"]},
    ],
)
def test_load_incomplete_document_returns_defaults(data_file: Path, doc: dict) -> None:
    data_file.write_text(json.dumps(doc), encoding="utf-8")

    assert JsonStore(data_file).load() == default_document()


def test_load_keeps_extra_keys_of_complete_document(data_file: Path) -> None:
    doc = default_document()
    doc["note"] = "written by hand"
    data_file.write_text(json.dumps(doc), encoding="utf-8")

    assert JsonStore(data_file).load()["note"] == "written by hand"
