"""
HilTim Hotel booking backend.

CSV-backed booking record store with CRUD services, validation,
import/export and a small HTTP API.
"""

__version__ = "1.0.0"
