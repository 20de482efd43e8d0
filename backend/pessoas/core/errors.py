import enum
import sqlite3
from typing import Optional

from psycopg2 import errorcodes
from sqlalchemy.exc import DBAPIError, IntegrityError

# sqlstate class 23 is "integrity constraint violation"
INTEGRITY_CLASS = errorcodes.INTEGRITY_CONSTRAINT_VIOLATION[:2]


class PessoasException(Exception):
    """base exception for pessoas-specific errors"""
    status_code = 500


class UnprocessableInput(PessoasException):
    """raised when a request is well-formed http but cannot be accepted (bad body, duplicate apelido)"""
    status_code = 422


class PersonNotFound(PessoasException):
    """raised when no person row exists for an id"""
    status_code = 404


class InternalFault(PessoasException):
    """raised for store, pool or parsing faults that are not the client's to fix"""
    status_code = 500


class MigrationError(PessoasException):
    """raised when the schema cannot be brought up to date at startup"""
    pass


class StoreErrorKind(enum.Enum):
    UNIQUE_VIOLATION = "unique_violation"
    INTEGRITY_VIOLATION = "integrity_violation"
    OTHER = "other"


def _sqlstate(driver_error) -> Optional[str]:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(driver_error, "pgcode", None) or getattr(driver_error, "sqlstate", None)


def classify(error: Exception) -> StoreErrorKind:
    """
    map a store error to the kind the handlers branch on

    accepts either a sqlalchemy DBAPIError (the driver error is on .orig)
    or a bare driver exception
    """
    driver_error = error.orig if isinstance(error, DBAPIError) else error

    code = _sqlstate(driver_error)
    if code:
        if code == errorcodes.UNIQUE_VIOLATION:
            return StoreErrorKind.UNIQUE_VIOLATION
        if code.startswith(INTEGRITY_CLASS):
            return StoreErrorKind.INTEGRITY_VIOLATION
        return StoreErrorKind.OTHER

    # sqlite has no sqlstate, it reports extended result names instead
    if isinstance(driver_error, sqlite3.IntegrityError):
        name = getattr(driver_error, "sqlite_errorname", "")
        if name == "SQLITE_CONSTRAINT_UNIQUE" or "UNIQUE constraint failed" in str(driver_error):
            return StoreErrorKind.UNIQUE_VIOLATION
        return StoreErrorKind.INTEGRITY_VIOLATION

    if isinstance(error, IntegrityError):
        return StoreErrorKind.INTEGRITY_VIOLATION

    return StoreErrorKind.OTHER
