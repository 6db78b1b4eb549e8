"""
Settings Repository - Nine-Box Talent Review
ninebox/repositories/settings_repository.py

Data access for the settings object of the document store.
"""

import logging
from typing import Any, Dict, Optional

from ninebox.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository):
    """Repository for stored application settings (thresholds)."""

    COLLECTION = "settings"

    def get_thresholds(self) -> Optional[Dict[str, Any]]:
        """Stored thresholds as-is, or None when never set."""
        return self.store.read()["settings"].get("thresholds")

    def set_thresholds(self, thresholds: Dict[str, Any]) -> Dict[str, Any]:
        with self.store.transaction() as document:
            document["settings"]["thresholds"] = thresholds
        logger.info(f"Updated thresholds: {thresholds}")
        return thresholds
