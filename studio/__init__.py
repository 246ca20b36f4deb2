"""AI Image Studio.

Architectural role:
    Turns user intent (kind + aspect ratio + prompt language) into image
    generation requests, overlays typography on the generated result, and
    describes uploaded images through a vision-capable model.

Package layout:
    - `llm`: provider configuration and the `generateContent` transport.
    - `nlp`: prompt translation.
    - `prompting`: kind-specific prompt and resolution assembly.
    - `image`: generation transport/service and the text compositor.
    - `vision`: image-understanding service.
    - `core`: flow state, orchestration, localized messages.
    - `api`: HTTP adapter and upload preprocessing.
"""
