from .actions import Action, SCRIPT_FILE_NAMES
from .errors import DimmerError
from .main_queue import MainQueue
from .runtime_context import RuntimeContext

__all__ = [
  "Action",
  "SCRIPT_FILE_NAMES",
  "DimmerError",
  "MainQueue",
  "RuntimeContext",
]
