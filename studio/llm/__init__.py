"""Model access package.

Architectural role:
    Provides provider configuration and the HTTP transport used by the
    translation, generation, and understanding services.

Module split:
    - `provider_config`: environment-driven endpoints, models, and credentials.
    - `client`: JSON POST transport and response-part extraction.
"""
