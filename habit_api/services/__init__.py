"""
High-level use cases for the Habit Tracker API.

Each service module orchestrates the repository to implement business rules
(signup, login, habit creation). Routers call these services instead of
touching the database directly.
"""
