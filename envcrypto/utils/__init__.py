"""
Utils module - Utility functions and helpers.

This module contains utility functions used throughout envcrypto.
"""

from envcrypto.utils.validators import is_path_within_directory, validate_path

__all__ = [
    "is_path_within_directory",
    "validate_path",
]
