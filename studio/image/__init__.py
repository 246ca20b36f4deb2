"""Image generation and compositing package.

Scope:
    Provides the image-provider client, the generation service used by the
    generation flow, the data-URL helpers, and the client-side text compositor.

Non-goals:
    - No upload ingestion (see `studio.api.multimodal`).
    - No image understanding (see `studio.vision`).
"""
