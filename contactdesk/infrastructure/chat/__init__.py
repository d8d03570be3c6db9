from .hub import ChatHub, Listener

__all__ = ["ChatHub", "Listener"]
