"""Endpoint modules for users and their exercise logs."""
