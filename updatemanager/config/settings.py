"""Update manager configuration — passed at construction, optionally from JSON."""

import json
import logging
import os
from dataclasses import dataclass

from updatemanager.store.base import DEFAULT_COLLECTION

logger = logging.getLogger(__name__)


@dataclass
class ManagerConfig:
    """Local configuration of an UpdateManager."""
    # Dialog
    app_name: str = ""                  # '' = "App" in prompts
    show_later_button: bool = False     # Offer "Later" on optional updates

    # Store
    auto_setup: bool = False            # Overwrites remote documents! One-shot only
    android_id: str = ""                # Used when the document has no androidId
    ios_id: str = ""                    # Used when the document has no iosId
    collection: str = DEFAULT_COLLECTION

    @staticmethod
    def load(path: str) -> 'ManagerConfig':
        """Load config from JSON. Returns defaults if the file is missing or bad."""
        if not os.path.isfile(path):
            logger.info("No config file at %s, using defaults", path)
            return ManagerConfig()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            config = ManagerConfig(**{k: v for k, v in data.items()
                                      if k in ManagerConfig.__dataclass_fields__})
            logger.info("Loaded config from %s", path)
            return config
        except Exception as e:
            logger.warning("Failed to load config: %s", e)
            return ManagerConfig()
