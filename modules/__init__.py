"""
Feature modules for the blog backend.

Each module is self-contained with its own:
- models.py: Pydantic models for data transfer
- service.py: Business logic over an injected data client
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Services never open data clients themselves; routes choose the scope
(caller, anonymous, or admin) and pass the client in.
"""
