"""
CorpHub backend: company registration and profile management.
"""

__version__ = "0.1.0"
