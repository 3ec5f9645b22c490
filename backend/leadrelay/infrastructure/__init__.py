"""Infrastructure Layer — gateway HTTP client, config store, credential and template sources, logging.

Invariants:
    - Infrastructure never imports from services/
    - Request-level failures are surfaced as data, not raised past the client
"""
