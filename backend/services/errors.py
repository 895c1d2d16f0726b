import enum


class ResultKind(str, enum.Enum):
    SUBMITTED = "submitted"
    NOTHING_TO_SUBMIT = "nothing_to_submit"
    TRANSFORM_ERROR = "transform_error"
    STORAGE_ERROR = "storage_error"
    UNEXPECTED_ERROR = "unexpected_error"


class FormWizardError(Exception):
    kind: ResultKind = ResultKind.UNEXPECTED_ERROR


class TransformError(FormWizardError, ValueError):
    """A draft value could not be coerced to its column type."""

    kind = ResultKind.TRANSFORM_ERROR


class StorageError(FormWizardError):
    """Wraps a database failure; the driver error is kept as ``__cause__``."""

    kind = ResultKind.STORAGE_ERROR
