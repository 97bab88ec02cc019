import json

import pytest

from storage.local_storage import LocalStorage, SAVED_RECIPES_KEY


class TestLocalStorage:

    def test_missing_key_returns_default(self, storage):
        assert storage.get_item("nothing") is None
        assert storage.get_item("nothing", []) == []

    def test_set_and_get(self, storage):
        storage.set_item(SAVED_RECIPES_KEY, [{"dishName": "Омлет"}])
        assert storage.get_item(SAVED_RECIPES_KEY) == [{"dishName": "Омлет"}]
        assert storage.file_exists(SAVED_RECIPES_KEY)

    def test_values_are_utf8_json_files(self, storage):
        storage.set_item("theme", "тёмная")
        path = storage.get_data_directory() / "theme.json"
        assert json.loads(path.read_text(encoding="utf-8")) == "тёмная"
        assert not list(storage.get_data_directory().glob("*.tmp"))

    def test_corrupt_value_reads_as_default(self, storage):
        (storage.get_data_directory() / "broken.json").write_text("{not json", encoding="utf-8")
        assert storage.get_item("broken", "fallback") == "fallback"

    def test_remove_item(self, storage):
        storage.set_item("a", 1)
        storage.remove_item("a")
        storage.remove_item("a")
        assert storage.get_item("a") is None

    def test_keys(self, storage):
        storage.set_item("b", 2)
        storage.set_item("a", 1)
        assert list(storage.keys()) == ["a", "b"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_invalid_keys(self, storage, key):
        with pytest.raises(ValueError):
            storage.set_item(key, 1)

    def test_creates_data_directory(self, tmp_path):
        LocalStorage(str(tmp_path / "nested" / "data"))
        assert (tmp_path / "nested" / "data").is_dir()

    def test_failed_write_leaves_no_temp_file(self, storage):
        storage.set_item("a", 1)
        with pytest.raises(TypeError):
            storage.set_item("a", {"value": object()})
        assert storage.get_item("a") == 1
        assert not list(storage.get_data_directory().glob("*.tmp"))
