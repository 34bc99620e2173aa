class LLMUpstreamError(RuntimeError):
    """Raised when the AI provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when the AI provider response violates the contract (empty, bad JSON, wrong shape)."""
    pass


class NoImageProducedError(LLMContractError):
    """Raised when an image request comes back without any inline image data."""

    def __init__(self, message: str = "No image generated.", text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class UploadRejectedError(ValueError):
    """Raised when an uploaded photo fails encoding or size validation."""
    pass


class InvalidTransitionError(ValueError):
    """Raised when a session action is not allowed from the current step."""
    pass


class ExportError(RuntimeError):
    """Raised when a plan document cannot be produced."""
    pass
