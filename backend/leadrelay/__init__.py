"""LeadRelay Application Package — lead capture and resilient gateway delivery.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
