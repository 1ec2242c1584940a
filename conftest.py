import pytest

from config import settings
from libcat.catalog import Catalog


@pytest.fixture
def lib():
    # Fresh in-memory catalog for each test
    return Catalog()


@pytest.fixture
def data_file(tmp_path, request, monkeypatch):
    # Unique snapshot file per test; the CLI reads it through settings
    path = tmp_path / f"test_{request.node.name}.json"
    monkeypatch.setattr(settings, "data_file", str(path))
    return path


@pytest.fixture(autouse=True)
def _isolate_cli_state(monkeypatch):
    import main

    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")
    main.CatalogManager.reset()
    yield
    main.CatalogManager.reset()
