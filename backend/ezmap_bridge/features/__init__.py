"""
Feature modules for the EzMap bridge.

Each feature is a self-contained module with:
- models.py - Domain types (dataclasses, enums)
- schemas.py - Pydantic schemas for the HTTP boundary
- service.py - Business logic
"""
