"""
Persistence adapters.

Services depend on the repository instead of opening SQLAlchemy sessions
themselves; the repository is handed to each service at construction time.
"""
