class LLMError(RuntimeError):
    pass


class LLMConfigError(LLMError):
    """Raised when a provider cannot be constructed (missing credential or SDK)."""


class LLMNotImplementedError(LLMError, NotImplementedError):
    """Raised by every operation of a provider that is not wired up yet."""


class LLMValidationError(LLMError):
    """Raised when the model output cannot be validated against the requested schema."""
