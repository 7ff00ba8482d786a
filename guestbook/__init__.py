"""
Guestbook Comment Service.

- core/: Configuration, logging, database, errors, middleware
- models/: SQLAlchemy table mappings
- schemas/: Pydantic request/response shapes
- validation/: Field table and localized constraint checks
- repositories/: SQL access for comments
- services/: Orchestration of validation and persistence
- api/: HTTP endpoints
"""

__version__ = "0.1.0"
