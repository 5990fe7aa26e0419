"""
dropfour - Connect Four against a heuristic computer opponent

This package provides the game engine (board, win detection, the computer's
move selection and the turn-based controller), a Gymnasium environment and a
terminal interface for playing.
"""

# Version number
__version__ = '0.1.0'
