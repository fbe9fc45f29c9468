import sys
from pathlib import Path
import pytest
from helpers import mark_by_dir


@pytest.fixture(autouse=True)
def _ensure_src_on_syspath():
    # Add project src/ to sys.path for src-layout imports
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
    yield


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    # Keep config-driven directories out of the real user cache
    monkeypatch.setenv("APIPORT_SESSION_DIRECTORIES__HOME", str(tmp_path / "home"))
    yield


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "apiport_session" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "apiport_session" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "apiport_session" / "app", pytest.mark.e2e)
