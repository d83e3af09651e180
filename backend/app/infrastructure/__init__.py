"""Infrastructure Layer — collaborator implementations and cross-cutting concerns.

Invariants:
    - Collaborators implement core/repository_protocols structurally
    - Logging setup lives here, called once from the app lifespan
"""
