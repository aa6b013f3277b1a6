from __future__ import annotations

from enum import Enum
from typing import Dict


class Action(Enum):
    """
    The closed set of appearance scripts shipped with the app.

    The value is the script identifier; the file name comes from SCRIPT_FILE_NAMES.
    """

    TOGGLE = "toggle"
    ENABLE = "on"
    DISABLE = "off"

    @property
    def file_name(self) -> str:
        return SCRIPT_FILE_NAMES[self]


SCRIPT_FILE_NAMES: Dict[Action, str] = {
    Action.TOGGLE: "toggle.scpt",
    Action.ENABLE: "on.scpt",
    Action.DISABLE: "off.scpt",
}
