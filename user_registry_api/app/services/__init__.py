"""
Service layer.

Services hold the business rules of each domain.  The HTTP handlers
only talk to the abstract store interface, so the in-memory store can
be replaced without touching the API layer.
"""
