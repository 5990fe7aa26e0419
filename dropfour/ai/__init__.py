"""
dropfour.ai - Computer player

The computer ranks every playable column into four priority tiers and picks
at random among the best ones.
"""

from dropfour.ai.heuristic import choose_column, classify_columns

__all__ = ['choose_column', 'classify_columns']
