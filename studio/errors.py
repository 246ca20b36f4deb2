"""Error taxonomy shared by the studio flows.

Propagation policy:
    - `UpstreamError` is raised by transport clients only.
    - Orchestrators map transport failures into their own error type.
    - `TranslationError` never leaves `studio.nlp.translator`; it is recovered
      there with the original text.
    - `GenerationError` and `UnderstandingError` abort their flow and are
      rendered as localized messages by `studio.core.engine`.
    - `LoadError` is raised by the compositor; callers fall back to the raw image.
"""


class StudioError(Exception):
    """Base class for all studio failures."""


class UpstreamError(StudioError):
    """Non-success response from a remote model endpoint.

    Attributes:
        status_code: HTTP status returned by the provider.
        message: Provider `error.message` when present, otherwise response text.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class LoadError(StudioError):
    """Base bitmap could not be decoded."""


class TranslationError(StudioError):
    """Prompt translation failed."""


class GenerationError(StudioError):
    """Image generation failed or returned no usable image."""


class UnderstandingError(StudioError):
    """Image understanding failed or returned no usable text."""


class NoImageProvidedError(UnderstandingError):
    """Understanding was requested without an uploaded image."""


class NoContentError(UnderstandingError):
    """Understanding response carried no candidate text."""
