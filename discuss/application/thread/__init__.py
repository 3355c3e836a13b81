"""Interactive thread state."""

from .coordinator import ReplyCoordinator

__all__ = ["ReplyCoordinator"]
