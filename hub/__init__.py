"""
Arcade Hub

Platform services shared by the mini-games: local profile storage, the
login gate, score recording, the cooperative scheduler and logging.
"""

__version__ = "1.0.0"

__all__ = ['__version__']
