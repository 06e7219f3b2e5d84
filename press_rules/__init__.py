"""
Press Rules - Golf Contest Settlement Engine

Computes money-based golf contests (match play, Nassau with presses, skins,
stableford, best-ball team formats, side pots and high-low-total) from
hole-by-hole scores and handicap data, and turns the outcomes into balanced
ledger entries.
"""

__version__ = "0.1.0"
__author__ = "Press Rules Team"
