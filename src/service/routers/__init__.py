from . import misc, pages, session

__all__ = ["misc", "pages", "session"]
