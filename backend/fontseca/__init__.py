"""
fontseca.dev Backend — Application Package Initializer
========================================================

What: The HTTP layer of fontseca.dev: the personal website, its article
      archive and the JSON API used to manage both.
Who:  Imported by uvicorn (`fontseca.main:app`) and by pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │       Routes (API + web pages)      │  ← binding, validation, status codes
    ├─────────────────────────────────────┤
    │     Service interfaces (ABCs)       │  ← implemented outside this package
    ├─────────────────────────────────────┤
    │      Models & Schemas (pydantic)    │  ← records and transfer records
    └─────────────────────────────────────┘

    Routes never touch storage or templates directly; they only see the
    interfaces in `fontseca.services.interfaces`, bundled in `Services`.
"""

__version__ = "1.0.0"
