"""
dropfour.interfaces - User interfaces for dropfour

Frontends only talk to GameController; they never touch the board directly.
"""

# Don't import anything here to avoid circular imports
__all__ = []
