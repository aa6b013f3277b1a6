from .preferences import DARK_MODE_STYLE_KEY, DARK_STYLE_VALUE, DID_SETUP_APPLE_SCRIPT_KEY, Preferences
from .store import MemoryPreferencesStore, PreferencesStore, YamlPreferencesStore

__all__ = [
  "DARK_MODE_STYLE_KEY",
  "DARK_STYLE_VALUE",
  "DID_SETUP_APPLE_SCRIPT_KEY",
  "Preferences",
  "PreferencesStore",
  "MemoryPreferencesStore",
  "YamlPreferencesStore",
]
