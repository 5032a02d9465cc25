"""Services - imperative shell that coordinates IO around the pure core.

Invariants:
    - Services depend on core protocols, never on concrete repositories
"""
