"""Bookstore catalog: paginated, filterable listings and CRUD.

Layers, outermost first:
- router: HTTP handlers mapping outcomes to JSON responses
- service: listing, filter values and mutations as explicit outcomes
- query: filter specification and pagination built from request input
- repository: store access through the document-style base repository
- models: SQLAlchemy table and Pydantic schemas
"""
