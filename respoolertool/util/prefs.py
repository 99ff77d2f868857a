#  Copyright (c) LTS Design 2026-10-17.

from logging import debug
from os.path import join
from typing import Any, Optional

from click import get_app_dir

from .fileio import readjson, writejson

PREF_BOARD = "board"
PREF_VARIANT = "variant"


class PreferenceStore:
    """
    Last-known-good board selection, kept between runs.

    Backed by a JSON file in the application directory. Reading or writing
    never fails the caller; a broken or missing file behaves like an empty one.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or join(get_app_dir("respoolertool"), "preferences.json")

    def _load(self) -> dict:
        try:
            return readjson(self.path) or {}
        except (OSError, UnicodeDecodeError) as e:
            debug(f"Couldn't read preferences from {self.path}: {e}")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        if data.get(key) == value:
            return
        data[key] = value
        try:
            writejson(self.path, data)
        except (OSError, TypeError) as e:
            debug(f"Couldn't store preference '{key}': {e}")
