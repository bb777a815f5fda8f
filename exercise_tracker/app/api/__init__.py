"""
API package containing the ``/api`` routes.

``router`` aggregates the domain routers defined in ``endpoints``.
"""
