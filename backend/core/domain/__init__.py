"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF handler translating those exceptions into responses.
access             Roles, the capability table and role-scoped querysets.
workflow           Generic status-transition engine.
filtering          Pure list filters (status, category, search, sort).
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.

Usage from any app::

    from core.domain.exceptions import DomainError, InvalidTransition
    from core.domain.workflow import Actor, StatusTransitionEngine
    from core.domain.transactions import apply_mutations, lock_for_update
    from core.domain.access import apply_role_scope
"""
