import json

import pytest

from library_tracker.library import Library
from library_tracker.store import CatalogStore


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # The CLI stores the output mode in the environment; keep tests isolated
    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")


@pytest.fixture
def data_file(tmp_path):
    # Each test gets its own catalog file
    return tmp_path / "library_data.json"


@pytest.fixture
def store(data_file):
    return CatalogStore(data_file)


@pytest.fixture
def lib(store):
    return Library(store)


@pytest.fixture
def read_data(data_file):
    def _read():
        with open(data_file, "r", encoding="utf-8") as f:
            return json.load(f)
    return _read
