"""
SettingsStore - Small persisted key=value store for the command-line tool.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

SETTINGS_FILENAME = 'photogallery.settings'
INITIALIZED_KEY = 'initialized'


def default_settings_dir() -> str:
    """Settings directory: $PHOTOGALLERY_HOME or ~/.photogallery."""
    return os.environ.get('PHOTOGALLERY_HOME') or os.path.join(
        os.path.expanduser('~'), '.photogallery'
    )


class SettingsStore:
    """
    Key/value settings persisted as 'key=value' lines.
    
    Used to show the welcome message only on the first run.
    """
    
    def __init__(
        self,
        directory: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.path = Path(directory or default_settings_dir()) / SETTINGS_FILENAME
        self.logger = logger or logging.getLogger(__name__)
    
    def load(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        values = {}
        with open(self.path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                values[key.strip()] = value.strip()
        return values
    
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.load().get(key, default)
    
    def set(self, key: str, value: str) -> None:
        values = self.load()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            for k in sorted(values):
                f.write(f"{k}={values[k]}\n")
    
    def is_initialized(self) -> bool:
        return self.get(INITIALIZED_KEY) == 'true'
    
    def set_initialized(self) -> None:
        self.set(INITIALIZED_KEY, 'true')
        self.logger.debug(f"Marked initialized in {self.path}")
