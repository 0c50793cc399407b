import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.application import reset_layout_state, reset_record_state


@pytest.fixture(autouse=True)
def reset_state():
    reset_record_state()
    reset_layout_state()
    yield
    reset_record_state()
    reset_layout_state()


@pytest.fixture()
def storage_root(tmp_path, monkeypatch):
    root = tmp_path / "storage"
    monkeypatch.setenv("LAYOUT_STORAGE_ROOT", str(root))
    return root


@pytest.fixture()
def client(storage_root):
    from backend.app import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
