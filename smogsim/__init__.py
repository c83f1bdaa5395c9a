"""Verlet particle physics with breakable links, and tank-battle game logic built on it."""

__version__ = "0.1.1"
__all__ = [
    "controller",
    "grid",
    "link",
    "model",
    "packets",
    "particle",
    "solver",
    "tank",
    "vector",
]