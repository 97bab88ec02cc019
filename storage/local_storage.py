import json
import logging
from pathlib import Path
from typing import Any, Iterator
from datetime import datetime, date

logger = logging.getLogger(__name__)

SAVED_RECIPES_KEY = "savedRecipes"
SHOPPING_CART_KEY = "shoppingCart"
THEME_KEY = "vitwi-theme"


class LocalStorage:
    """
    Key-value store where every value is a JSON document in its own file.

    Mirrors the browser localStorage contract used by the Mini App:
    whole values are read and written at once, and a missing or
    unreadable value reads as the caller's default.
    """

    def __init__(self, data_directory: str = "storage/data"):
        self.data_directory = Path(data_directory)
        self.data_directory.mkdir(parents=True, exist_ok=True)

    def _json_serializer(self, obj):
        """Custom JSON serializer for datetime and date objects"""
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_directory / f"{key}.json"

    def _load_json_file(self, file_path: Path, default_value=None):
        """Load JSON data from file with error handling"""
        if not file_path.exists():
            return default_value

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            logger.warning(f"Unreadable value in {file_path.name}, using default: {e}")
            return default_value

    def _save_json_file(self, file_path: Path, data):
        """Save data to JSON file, replacing the previous value atomically"""
        tmp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=self._json_serializer)
            tmp_path.replace(file_path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    # localStorage-style API
    def get_item(self, key: str, default: Any = None) -> Any:
        """Return the decoded value stored under key, or default"""
        return self._load_json_file(self._path_for(key), default)

    def set_item(self, key: str, value: Any) -> None:
        """Encode value as JSON and store it under key"""
        self._save_json_file(self._path_for(key), value)
        logger.debug(f"Stored {key}")

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()

    def keys(self) -> Iterator[str]:
        return (path.stem for path in sorted(self.data_directory.glob("*.json")))

    # Utility methods
    def get_data_directory(self) -> Path:
        """Get the data directory path"""
        return self.data_directory

    def file_exists(self, key: str) -> bool:
        """Check if a value is stored under key"""
        return self._path_for(key).exists()
