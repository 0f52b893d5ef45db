"""Product inventory service.

Products, their variants and sub-variants, and categories, persisted with
SQLModel and served over a FastAPI application.
"""

__version__ = "0.1.0"
