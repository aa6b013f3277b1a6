from .copy import run as copy_run
from .mkdir import run as mkdir_run
from .remove import run as remove_run
from .stat import run as stat_run

__all__ = ["copy_run", "mkdir_run", "remove_run", "stat_run"]
