class SigV4Error(Exception):
    """Base class for all errors raised by awsv4."""


class MissingCredentialsError(SigV4Error):
    """Signing needs key material that was never resolved."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unable to sign request: {field} is not set")
