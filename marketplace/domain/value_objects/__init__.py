"""Value Objects del dominio."""

from marketplace.domain.value_objects.datetime_range import DatetimeRange
from marketplace.domain.value_objects.money import Money

__all__ = [
    "DatetimeRange",
    "Money",
]
