"""
Service layer.

Each service encapsulates the business logic of one domain: input
that reached a service has already been validated by its schema, and
the service performs ownership checks and store operations.
"""
