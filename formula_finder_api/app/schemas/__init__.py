"""
Pydantic schema definitions for API payloads.

Each domain defines its own request and response models.  Shared
building blocks (the response envelope and the partial update base
class) live in ``common``.
"""
