"""
Jotter Backend — API Schemas
==============================

Pydantic models for the HTTP contract. Request bodies keep every field
optional so that presence checks happen in `jotter.validation` and come back
in the standard error envelope. Response models serialize with camelCase
aliases for the browser client.
"""
