"""
Round and contest payload handling.

Parses raw round snapshots and contest configurations into typed models and
renders computed results as canonical JSON.
"""
