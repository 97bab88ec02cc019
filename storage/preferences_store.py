import logging

from models.preferences import ThemeName
from .local_storage import LocalStorage, THEME_KEY

logger = logging.getLogger(__name__)

DEFAULT_THEME = ThemeName.light


class PreferencesStore:
    """UI preferences kept next to the recipe data"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def get_theme(self) -> ThemeName:
        value = self.storage.get_item(THEME_KEY, DEFAULT_THEME.value)
        try:
            return ThemeName(value)
        except ValueError:
            logger.warning(f"Unknown theme {value!r}, using {DEFAULT_THEME.value}")
            return DEFAULT_THEME

    def set_theme(self, theme: ThemeName) -> ThemeName:
        theme = ThemeName(theme)
        self.storage.set_item(THEME_KEY, theme.value)
        return theme
