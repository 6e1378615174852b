# common/__init__.py
"""
Shared HTTP plumbing: response envelope, exception translation,
identifier parsing, pagination and the generic CRUD controller factory.
"""
