"""Core orchestration package.

Architectural role:
    Exposes the flow layer that sits between the HTTP adapter and the lower-level
    services (translation, prompting, generation, compositing, understanding).

Composition:
    - `state`: explicit per-flow state structures.
    - `engine`: async flow runners and the pure display-image function.
    - `messages`: localized user-facing strings.

Determinism and side effects:
    Package import itself is deterministic and side-effect free.
"""
