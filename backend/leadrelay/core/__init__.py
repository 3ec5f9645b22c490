"""Core Layer — pure message shaping and retry classification, no IO.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Functions are pure and deterministic (time-based id fallback aside)

Design Decisions:
    - Functional core separated from imperative shell: the dispatcher loop
      lives in services/, the decisions it makes live here
"""
