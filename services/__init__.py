"""
Service layer for business logic.

This package contains the dashboard service that owns the session
state and runs the load, filter, aggregate and export pipeline.
"""
