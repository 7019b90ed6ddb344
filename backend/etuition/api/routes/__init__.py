"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to services)

Design Decisions:
    - Root-level paths (no /api/v1 prefix): existing web clients call them as-is
    - Explicit registration in main.py over auto-discovery
"""
