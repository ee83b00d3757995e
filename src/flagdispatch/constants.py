from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Value recorded for presence-only flags, and the only text a bool callback reads as True.
TRUE_LITERAL: str = 'true'

# Literals accepted after '=' on a presence-only flag (-v=false still marks -v as present).
BOOL_LITERALS = frozenset({'1', 't', 'T', 'TRUE', 'true', 'True', '0', 'f', 'F', 'FALSE', 'false', 'False'})
