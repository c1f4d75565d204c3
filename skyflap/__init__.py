"""
Skyflap - offline arcade runtime.

Platform layer shared by the games in this repository: logging,
key-value persistence, effect/capability interfaces and the standard
game states.
"""

__version__ = '1.0.0'

__all__ = ['__version__']
