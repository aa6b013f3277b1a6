from __future__ import annotations

from typing import Optional

from .store import PreferencesStore

DARK_MODE_STYLE_KEY = "AppleInterfaceStyle"
DARK_STYLE_VALUE = "Dark"
DID_SETUP_APPLE_SCRIPT_KEY = "didSetupAppleScript"


class Preferences:
    """
    Typed view over the two keys the app owns.

    didSetupAppleScript only ever moves from false to true; there is no API to reset it.
    """

    def __init__(self, store: PreferencesStore) -> None:
        self._store = store

    @property
    def store(self) -> PreferencesStore:
        return self._store

    @property
    def did_setup_apple_script(self) -> bool:
        return self._store.get(DID_SETUP_APPLE_SCRIPT_KEY, False) is True

    def mark_apple_script_setup(self) -> None:
        self._store.set(DID_SETUP_APPLE_SCRIPT_KEY, True)

    @property
    def dark_mode_style(self) -> Optional[str]:
        value = self._store.get(DARK_MODE_STYLE_KEY)
        return value if isinstance(value, str) else None

    @dark_mode_style.setter
    def dark_mode_style(self, value: Optional[str]) -> None:
        if value is None:
            self._store.remove(DARK_MODE_STYLE_KEY)
        else:
            self._store.set(DARK_MODE_STYLE_KEY, value)
