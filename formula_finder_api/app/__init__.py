"""
Application package initializer.

The API stores formula groups, formulas, worked examples and per-user
formula state.  Each domain has a service module in ``services``,
pydantic payloads in ``schemas`` and a router in
``api/v1/endpoints``.
"""
