"""Shared utility functions for service layer."""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from services.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def constraint_name(error: IntegrityError) -> str | None:
    """
    Return the name of the constraint an IntegrityError violated, if the driver reports it.

    asyncpg exposes it on the wrapped exception; fall back to None so callers can
    match on the error text instead.
    """
    orig = getattr(error, "orig", None)
    name = getattr(orig, "constraint_name", None)
    if name is None:
        cause = getattr(orig, "__cause__", None)
        name = getattr(cause, "constraint_name", None)
    return name


def violates(error: IntegrityError, name: str) -> bool:
    """Check whether an IntegrityError was raised by the named constraint."""
    return constraint_name(error) == name or name in str(error)


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """
    Re-raise connection-level database failures as StoreUnavailableError.

    Constraint violations and programming errors pass through untouched.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.exception("Database unavailable")
        raise StoreUnavailableError(str(e.orig) if e.orig else str(e)) from e
    except DBAPIError as e:
        if e.connection_invalidated:
            logger.exception("Database connection invalidated")
            raise StoreUnavailableError("Database connection lost") from e
        raise
