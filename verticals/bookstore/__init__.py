"""Bookstore vertical: the /books REST resource.

- SQLAlchemy model for the ``books`` table
- Repository over the generic CRUD base
- Service returning Success/Failure results
- FastAPI router mapping results to status codes
"""
