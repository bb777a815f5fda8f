"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer to decouple the API
representation (``_id``, calendar-string dates) from how rows are kept
in SQLite.
"""
