"""Infrastructure Layer — database, provider clients, tokens, and logging.

Invariants:
    - Infrastructure imports only errors and value types from core/, never policy
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw SDK clients (ADR: single responsibility)
"""
