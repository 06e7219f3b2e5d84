"""
Configuration defaults, per-contest-type overrides and validation.
"""
