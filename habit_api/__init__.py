"""Entry point for the Habit Tracker FastAPI app."""
from habit_api.app import create_app

__all__ = ["create_app"]
