"""
Feature modules for the Kastel Ops backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API and storage
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- repository.py: Supabase and in-memory storage
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
