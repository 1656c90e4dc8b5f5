"""Infrastructure Layer — upstream HTTP clients, local files and logging setup.

Invariants:
    - Every external failure is mapped to a ShiciError subclass (core/errors.py)
    - No retries: a failed call fails the request (or startup) immediately
"""
