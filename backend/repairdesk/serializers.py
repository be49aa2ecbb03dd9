"""Turn handler results into JSON-ready values.

Money (``Decimal``) becomes a float, timestamps become ISO-8601 UTC strings
and calendar dates become UTC-midnight timestamps.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum

from .extensions import db


def _iso_utc(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def record_to_dict(record):
    return {column.key: getattr(record, column.key) for column in record.__table__.columns}


def to_jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return _iso_utc(value)
    if isinstance(value, date):
        return _iso_utc(datetime.combine(value, time.min))
    if isinstance(value, db.Model):
        return to_jsonable(record_to_dict(value))
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    raise TypeError(f"Cannot serialize {type(value).__name__}")
