class SubmissionValidationError(Exception):
    """The submission failed validation; `errors` maps field -> message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(f"Submission has {len(errors)} invalid field(s): {', '.join(sorted(errors))}")


class SubmissionTransportError(Exception):
    """The lead could not be recorded. The user has to resubmit."""


class LeadStoreError(Exception):
    """Raised by a LeadStore when the append did not go through."""


class NotificationError(Exception):
    """Raised by a Notifier when a message could not be sent."""


class IpLookupError(Exception):
    """Raised by an IpResolver when no address could be determined."""
