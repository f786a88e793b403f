import pytest

import database
from config import settings
from library import Library


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    # Her test için benzersiz bir veri dosyası oluştur
    path = str(tmp_path / "library_data.json")
    monkeypatch.setattr(database, "DATA_FILE", path)
    monkeypatch.setattr(settings, "export_dir", str(tmp_path))
    return path


@pytest.fixture
def lib(data_file):
    # Kütüphanenin bu veri dosyasını kullandığından emin ol
    return Library()


@pytest.fixture
def alice(lib):
    lib.register("alice", "wonderland", "Alice Liddell", "alice@example.com")
    return lib.find_user("alice")
