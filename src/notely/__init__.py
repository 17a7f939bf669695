"""
Notely Backend - Personal Notes Service

A small multi-tenant notes API: register, authenticate with bearer tokens,
then manage and search your own notes.
"""

__version__ = "1.0.0"
