"""Pixie: provisions a fresh Windows machine.

Core design goals:
- Ordered steps, each a precondition for the next
- Explicit fatal/soft failure policy
- Idempotent where the system allows it (existing package manager, directories)
- Guaranteed cleanup of the temporary clone
- Centralized logging
"""

__all__ = []
