"""
Domain models for pgp-encrypt.
"""

from pgp_encrypt.models.tasks import FileTask, RunSummary

__all__ = [
    "FileTask",
    "RunSummary",
]
