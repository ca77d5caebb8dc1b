"""Game domain services: timer, purchases, achievements and persistence.

This package contains the pure(ish) rules of the game. HTTP routes and
CLI commands call into it while holding the store lock, keeping transport
concerns separated from core game mechanics.
"""
