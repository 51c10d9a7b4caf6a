"""Shared data models for vault_library."""

from .base import CamelCaseModel

__all__ = ["CamelCaseModel"]
