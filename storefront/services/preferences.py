"""Display preferences"""

import logging
from datetime import datetime
from typing import Optional

from ..core.clock import Clock, SystemClock
from ..storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class Preferences:
    """Theme and language, remembered across sessions"""

    DARK_MODE_KEY = "darkMode"
    LANGUAGE_KEY = "language"
    UPDATED_AT_KEY = "preferencesUpdatedAt"

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Optional[Clock] = None,
        default_language: str = "en",
    ):
        self.storage = storage
        self.clock = clock or SystemClock()
        self.dark_mode = False
        self.language = default_language
        self.updated_at: Optional[datetime] = None
        self._load()

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        self._save(self.DARK_MODE_KEY, "true" if self.dark_mode else "false")
        return self.dark_mode

    def change_language(self, language: str) -> None:
        self.language = language
        self._save(self.LANGUAGE_KEY, language)

    def _save(self, key: str, value: str) -> None:
        self.updated_at = self.clock.now()
        try:
            self.storage.set(key, value)
            self.storage.set(self.UPDATED_AT_KEY, self.updated_at.isoformat())
        except Exception as e:
            logger.error(f"Error saving preference {key}: {e}")

    def _load(self) -> None:
        try:
            dark_mode = self.storage.get(self.DARK_MODE_KEY)
            language = self.storage.get(self.LANGUAGE_KEY)
            updated_at = self.storage.get(self.UPDATED_AT_KEY)
        except Exception as e:
            logger.warning(f"Preference storage unavailable: {e}")
            return

        if dark_mode is not None:
            self.dark_mode = dark_mode == "true"
        if language:
            self.language = language
        if updated_at:
            try:
                self.updated_at = datetime.fromisoformat(updated_at)
            except ValueError:
                logger.warning(f"Ignoring malformed preference timestamp {updated_at!r}")
