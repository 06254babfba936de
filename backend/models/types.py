"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing UserID where CoincidenceID expected).

Uses TypeAlias for types that are purely structural.
"""

from typing import Any, NewType, TypeAlias

# ID types using NewType for type safety
CoincidenceID = NewType("CoincidenceID", str)
UserID = NewType("UserID", str)
PushToken = NewType("PushToken", str)

# Structural aliases using TypeAlias
MatchPercentage: TypeAlias = float  # 0-100
PushData: TypeAlias = dict[str, Any]
