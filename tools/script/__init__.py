from .run import run as script_run

__all__ = ["script_run"]
