"""Domain models and pure helpers.

- Data records for activities and time entries (Pydantic v2).
- The domain knows nothing about HTTP or the CLI.
"""
