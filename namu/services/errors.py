class ServiceError(Exception):
    pass


class ValidationError(ServiceError):
    """Malformed or missing input, detected before any collaborator call."""


class UpstreamFailure(ServiceError):
    pass


class GenerationError(UpstreamFailure):
    pass


class RateLimitedError(GenerationError):
    pass


class EmailDeliveryError(UpstreamFailure):
    def __init__(self, recipient: str, reason: str):
        super().__init__(f"Failed to send email to {recipient}: {reason}")
        self.recipient = recipient
        self.reason = reason


class GeminiConfigurationError(ServiceError):
    pass


class EmailConfigurationError(ServiceError):
    pass
