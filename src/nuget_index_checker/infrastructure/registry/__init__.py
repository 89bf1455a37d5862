from .probe import HttpxResourceProbe

__all__ = ["HttpxResourceProbe"]
