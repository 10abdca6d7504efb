"""Failures raised by the design service client."""


class DesignServiceError(Exception):
    """Base class for generative-service failures."""


class GenerationError(DesignServiceError):
    """The plan request returned no content or content that is not a design plan."""


class NoImageError(DesignServiceError):
    """The visualization response carried no image part."""
