"""
StackIt Backend — API Schemas
===============================

Pydantic models defining the contract between the SPA and the backend.
Kept separate from the ORM models so internal columns (password_hash,
foreign keys nobody asked for) never leak into a response.
"""
