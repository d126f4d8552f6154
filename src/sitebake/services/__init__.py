"""Service layer — read-only queries over a resolved configuration.

Services return ServiceResult and never write to stdout themselves.
They must never import from commands or output.
"""
