"""
FWRCFN Backend — Application Package
=====================================

What: Community-fridge directory API (user accounts + fridge locations).
How:  FastAPI routes on top of small services, persisted in MongoDB.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← registration, login, seeding
    ├─────────────────────────────────────┤
    │   Models & Schemas (Documents/DTO)  │  ← pydantic documents + contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← pymongo async client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
