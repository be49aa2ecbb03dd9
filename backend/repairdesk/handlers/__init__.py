"""Record handlers: one module per entity, each a set of plain functions.

Reads return ORM records (or ``None`` when a single record is absent).
Mutations run inside :func:`unit_of_work`, so every statement a handler
issues is committed together or rolled back together.
"""

import functools

from ..accounting import money
from ..errors import NotFoundError, RepairDeskError
from ..extensions import db
from ..logs import log


def unit_of_work(description):
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
                db.session.commit()
            except RepairDeskError:
                db.session.rollback()
                log.warning("%s failed; changes rolled back", description)
                raise
            except Exception:
                db.session.rollback()
                log.exception("%s failed", description)
                raise
            return result
        return wrapper
    return decorator


def require(model, record_id, label=None):
    """Load ``model`` by primary key or raise :class:`NotFoundError`."""

    record = db.session.get(model, record_id)
    if record is None:
        label = label or model.__name__
        log.warning("%s lookup failed for id %s", label, record_id)
        raise NotFoundError(label, record_id)
    return record


def apply_changes(record, changes, money_fields=()):
    for field, value in changes.items():
        if field in money_fields and value is not None:
            value = money(value)
        setattr(record, field, value)
    return record


__all__ = ["unit_of_work", "require", "apply_changes"]
