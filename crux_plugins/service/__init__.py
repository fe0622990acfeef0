"""Service layer: deployment routine, HTTP app and CLI.

Submodules are imported explicitly by callers; importing this package does
not pull in FastAPI.
"""
