"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives the
``Database`` client explicitly, so API handlers never touch SQL.
"""
