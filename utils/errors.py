"""Custom exceptions for the intake status workflows."""


class StatusDigestError(Exception):
    """Base exception for the intake status automation."""

    pass


class ConfigError(StatusDigestError):
    """Configuration-related errors (missing credentials, bad settings)."""

    pass


class ValidationError(StatusDigestError):
    """Input validation errors."""

    pass


class NotFoundError(StatusDigestError):
    """A requested intake, project, or issue record does not exist."""

    pass


class InvalidActionError(ValidationError):
    """Unrecognized reviewer action."""

    pass


class DeliveryError(StatusDigestError):
    """The webhook relay did not accept a message."""

    pass


class AirtableError(StatusDigestError):
    """Errors related to Airtable operations."""

    pass
