"""
File processing services for pgp-encrypt.
"""

from pgp_encrypt.services.encryptor import FolderEncryptor
from pgp_encrypt.services.traversal import is_encrypted, plan_tasks, walk_files
from pgp_encrypt.services.writer import write_in_place, write_mirrored

__all__ = [
    "FolderEncryptor",
    "is_encrypted",
    "plan_tasks",
    "walk_files",
    "write_in_place",
    "write_mirrored",
]
