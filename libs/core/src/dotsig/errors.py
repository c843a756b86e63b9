"""Error taxonomy surfaced to the operator.

Every error aborts the run; none is retried. A signature that does not
verify is a result, not an error.
"""


class DotsigError(Exception):
    """Base class for all dotsig failures."""


class UsageError(DotsigError):
    """Missing or invalid command line input."""


class KeyImportError(DotsigError):
    """No supported encoding could be parsed from an identity file."""


class OverwriteError(DotsigError, FileExistsError):
    """Export target already exists."""


class InputFileError(DotsigError, OSError):
    """An input document is missing or unreadable."""


class MissingDocumentError(DotsigError):
    """The original message for a ``.sig`` entry could not be resolved."""


class DuplicateAlgorithmError(DotsigError):
    """An algorithm id was registered twice."""


class UnknownAlgorithmError(DotsigError, KeyError):
    """No constructor is registered for the requested algorithm id."""

    def __str__(self) -> str:
        return f"Unknown algorithm: {self.args[0]}" if self.args else "Unknown algorithm"


class MissingKeyError(DotsigError):
    """The identity lacks the key an operation needs (e.g. signing with a public key)."""
