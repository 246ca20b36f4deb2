"""Upload preprocessing package for API adapters.

Architectural role:
- Converts user-selected image files into inline payloads for the vision flow.
- Applies size/type/path constraints before any upstream request.

Scope:
- Content preprocessing only; no HTTP endpoint definitions.
"""
