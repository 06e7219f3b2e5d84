"""
Scoring kernel: handicap allocation, match play state, points and segments.
"""
