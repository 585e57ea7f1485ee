"""
Forum Comments API: Application Package Initializer
=====================================================

What: Marks the `forum_api` directory as a Python package.
Who:  Imported by uvicorn (`forum_api.main:app`), pytest, and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← path/body extraction, status codes
    ├─────────────────────────────────────┤
    │       Services (Comment Handlers)   │  ← one store call per operation
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← BSON documents + Pydantic contracts
    ├─────────────────────────────────────┤
    │      Database (Document Store)      │  ← shared AsyncMongoClient
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
