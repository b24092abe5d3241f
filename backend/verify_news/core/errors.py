class VerificationError(Exception):
    """Base class for every failure raised by the verification pipeline."""


class InvalidQueryError(VerificationError):
    """The submitted claim text is missing or blank."""


class CacheReadError(VerificationError):
    """The cache store could not be queried."""


class CacheWriteError(VerificationError):
    """A fresh result could not be persisted."""


class CollaboratorError(VerificationError):
    """An external provider (search or text generation) failed."""


class SearchError(CollaboratorError):
    pass


class AnalysisError(CollaboratorError):
    pass
