"""AI Image Studio API adapter package.

Architectural role:
- Defines the external interaction boundary (HTTP).
- Performs transport-level validation and response shaping.
- Delegates flow work to `studio.core.engine`.

Scope:
- Request lifecycle control for adapter concerns only.
- No direct model invocation logic is implemented in this package root.
"""
