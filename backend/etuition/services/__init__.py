"""Services Layer — async orchestration between routes, core policy, and the store.

Invariants:
    - Services do the IO; every allow/deny and transition decision comes from core/
    - Each public coroutine takes the request AsyncSession as its first argument
    - Writes end with an explicit commit; failures roll back before surfacing

Design Decisions:
    - Module per record collection (users, tuitions, applications, payments) plus stats
      (ADR: routes stay thin, one place per collection to read its rules)
"""
