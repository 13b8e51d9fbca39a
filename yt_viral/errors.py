from __future__ import annotations


class MissingCredentialError(RuntimeError):
    """Raised before any network call when a required API key is blank."""

    def __init__(self, credential: str = "YOUTUBE_API_KEY", detail: str = "") -> None:
        self.credential = credential
        super().__init__(detail or f"{credential} is missing")


class UpstreamAPIError(RuntimeError):
    """
    The video-data provider reported an error at a named stage.
    stage is one of: search | statistics | channel | comments
    message is the provider's text, passed through verbatim.
    """

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        self.message = message
        super().__init__(f"{stage}: {message}")


class AnalysisError(RuntimeError):
    """The AI collaborator returned output we could not use."""
