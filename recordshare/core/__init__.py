"""
Shared, cross-cutting code for the service.

`core/` holds the building blocks every feature uses (settings, DB pool,
logging, error rendering). Feature SQL and business rules live in the
feature packages (`auth/`, `records/`, `users/`).
"""
