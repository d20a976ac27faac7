"""Game domain services: rounds, secrets and timers.

This package contains pure(ish) domain logic that socket handlers import,
keeping transport concerns separated from core game mechanics.
"""
