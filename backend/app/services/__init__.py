"""Services Layer — stateful editor sessions over the pure core.

Invariants:
    - Services apply core transitions; they never re-implement form rules
    - All collaborator IO (persistence, quota, notifications) is orchestrated here
"""
