"""
Core domain layer for player-verify.

This package contains pure matching and extraction logic with no external
dependencies. All code here should be testable without I/O operations.
"""

from __future__ import annotations

__all__ = []
