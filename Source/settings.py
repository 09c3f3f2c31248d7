"""
User settings for Dinner Debt
Settings are loaded once into a Settings object and saved through a key-value store
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol

from constants import SETTING_API_KEY, SETTING_BETA_FEATURES, SETTING_VENMO_USERNAME

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Where settings live between runs"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store, used by tests and one-off runs"""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class JsonFileStore:
    """Store backed by a JSON object on disk, created on first write"""

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


@dataclass
class Settings:
    beta_features_enabled: bool = False
    api_key: Optional[str] = None
    venmo_username: Optional[str] = None


def load_settings(store: KeyValueStore) -> Settings:
    return Settings(
        beta_features_enabled=store.get(SETTING_BETA_FEATURES) == 'true',
        api_key=store.get(SETTING_API_KEY) or None,
        venmo_username=store.get(SETTING_VENMO_USERNAME) or None,
    )


def save_settings(settings: Settings, store: KeyValueStore) -> None:
    store.set(SETTING_BETA_FEATURES, 'true' if settings.beta_features_enabled else 'false')
    for key, value in ((SETTING_API_KEY, settings.api_key),
                       (SETTING_VENMO_USERNAME, settings.venmo_username)):
        if value:
            store.set(key, value)
        else:
            store.delete(key)
