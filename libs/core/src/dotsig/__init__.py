
from .interfaces import Identity
from .registry import registry
from .errors import (
    DotsigError,
    UsageError,
    KeyImportError,
    OverwriteError,
    InputFileError,
    MissingDocumentError,
    DuplicateAlgorithmError,
    UnknownAlgorithmError,
    MissingKeyError,
)
from .keys import KeyMaterial
from .params import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS, canonical_algorithm
from .results import SignResult, VerifyResult

__version__ = "1.1.0-RC.1"

__all__ = [
    "Identity",
    "registry",
    "DotsigError",
    "UsageError",
    "KeyImportError",
    "OverwriteError",
    "InputFileError",
    "MissingDocumentError",
    "DuplicateAlgorithmError",
    "UnknownAlgorithmError",
    "MissingKeyError",
    "KeyMaterial",
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "canonical_algorithm",
    "SignResult",
    "VerifyResult",
    "__version__",
]
