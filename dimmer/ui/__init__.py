from .presenter import Alert, DirectoryPanel, Presenter, SelectionHandler

__all__ = ["Alert", "DirectoryPanel", "Presenter", "SelectionHandler"]
