"""
Top-level package for the Formula Finder API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``formula_finder_api.app.main:app``.
"""

__all__ = []
