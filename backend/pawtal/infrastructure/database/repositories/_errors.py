"""Translate SQLAlchemy failures into domain exceptions."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pawtal.domain.exceptions import StorageError


def unique_constraint(model, name: str) -> UniqueConstraint:
    """Look up a named unique constraint on a mapped class's table."""
    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint) and constraint.name == name:
            return constraint
    raise LookupError(f"{model.__tablename__} has no unique constraint '{name}'")


def violates(exc: IntegrityError, constraint: UniqueConstraint) -> bool:
    """True when ``exc`` was raised by ``constraint``.

    PostgreSQL names the constraint in its message, SQLite only lists the
    offending columns.
    """
    message = str(exc.orig)
    if constraint.name and constraint.name in message:
        return True
    columns = ", ".join(f"{constraint.table.name}.{column.name}" for column in constraint.columns)
    return f"UNIQUE constraint failed: {columns}" in message


@contextmanager
def storage_errors(
    operation: str,
    on_conflict: Callable[[], Exception] | None = None,
    constraint: UniqueConstraint | None = None,
) -> Iterator[None]:
    """Wrap a block of session calls.

    A violation of ``constraint`` becomes ``on_conflict()``; every other
    failure raised by SQLAlchemy, other integrity errors included, becomes
    ``StorageError``.
    """
    try:
        yield
    except IntegrityError as exc:
        if on_conflict is not None and constraint is not None and violates(exc, constraint):
            raise on_conflict() from exc
        raise StorageError(operation) from exc
    except SQLAlchemyError as exc:
        raise StorageError(operation) from exc
