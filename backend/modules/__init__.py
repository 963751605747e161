"""
Feature modules for the Folio backend.

Each module owns its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- routes.py: FastAPI route handlers (where the module is exposed over HTTP)
- exceptions.py: Module-specific exceptions

Modules depend on each other through interfaces, not concrete implementations.
"""
