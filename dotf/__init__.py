"""Game-logic core of a robot defence game: sprites, robots and state sync."""

__version__ = "0.1.0"
__all__ = ["client", "protocol", "resources", "robots", "sprite"]