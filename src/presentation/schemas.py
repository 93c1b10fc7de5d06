"""Field types shared by the request bodies."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, StringConstraints


def to_naive_utc(value: datetime) -> datetime:
    """Shift offset-aware datetimes to UTC and drop the tzinfo.

    Naive values are taken as UTC already. Every stored timestamp is naive
    UTC so ordering and day windows compare like with like.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow_naive() -> datetime:
    return to_naive_utc(datetime.now(timezone.utc))


NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
