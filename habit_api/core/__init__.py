"""
Core utilities shared across the Habit Tracker API.

This package hosts configuration, logging setup, password hashing and the
rate limit helper. Services and routers depend on these primitives instead of
reading the environment directly.
"""
