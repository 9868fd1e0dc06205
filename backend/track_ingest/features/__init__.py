"""
Feature modules for Track Ingest.

Each feature is a self-contained module with:
- schemas.py - Pydantic schemas
- service.py - Entry point
- exceptions.py - Error kinds
"""
