"""Error taxonomy for the data-access and business layers.

Every error raised by this package derives from CrudCoreError so callers can
catch the whole family at an API boundary.  Store-native failures (SQLAlchemy,
driver errors) never escape a repository unwrapped; they are re-raised as
DataAccessError with the original exception chained as __cause__.
"""


class CrudCoreError(Exception):
    """Base exception for crudcore."""

    pass


class EntityNotFoundError(CrudCoreError):
    """Raised when an update or delete targets a row that no longer exists."""

    pass


class AmbiguousMatchError(CrudCoreError):
    """Raised when a single-record lookup matches more than one row."""

    pass


class ParameterValidationError(CrudCoreError, ValueError):
    """Raised when required paging, sort or filter parameters are invalid."""

    pass


class UnknownSortColumnError(ParameterValidationError):
    """Raised when a sort column is not in the repository's lookup table."""

    pass


class DataAccessError(CrudCoreError):
    """Raised when the backing store fails to execute or commit."""

    pass


class ConcurrencyConflictError(DataAccessError):
    """Raised when the stored concurrency token differs from the entity's."""

    pass


class QueryTimeoutError(DataAccessError):
    """Raised when a statement exceeds the configured query timeout."""

    pass
