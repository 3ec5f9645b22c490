"""Services Layer — message dispatch orchestration and lead notification.

Invariants:
    - Services depend on core/ for decisions and on injected collaborators for IO
"""
