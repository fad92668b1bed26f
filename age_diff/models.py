"""Result schema produced by the age engine.

The birthday / non-birthday split is a union of two models so that a result
can never carry both a ``turning_age`` and a countdown, or neither.  Field
names are snake_case in Python and camelCase on the wire.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class SinceBirthComponents(_Frozen):
    years: int = Field(..., ge=0)
    months: int = Field(..., ge=0, lt=12)
    days: int = Field(..., ge=0)
    hours: int = Field(..., ge=0, lt=24)
    minutes: int = Field(..., ge=0, lt=60)
    seconds: int = Field(..., ge=0, lt=60)


class SinceBirthTotals(_Frozen):
    years: int = Field(..., ge=0)
    months: int = Field(..., ge=0)
    days: int = Field(..., ge=0)
    hours: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0)
    seconds: int = Field(..., ge=0)


class CountdownComponents(_Frozen):
    """Countdown breakdown.  There is no ``years`` field; months is the leading unit."""

    months: int = Field(..., ge=0)
    days: int = Field(..., ge=0)
    hours: int = Field(..., ge=0, lt=24)
    minutes: int = Field(..., ge=0, lt=60)
    seconds: int = Field(..., ge=0, lt=60)


class CountdownTotals(_Frozen):
    months: int = Field(..., ge=0)
    days: int = Field(..., ge=0)
    hours: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0)
    seconds: int = Field(..., ge=0)


class SinceBirth(_Frozen):
    components: SinceBirthComponents
    totals: SinceBirthTotals


class UntilNextBirthday(_Frozen):
    components: CountdownComponents
    totals: CountdownTotals


class _ResultBase(_Frozen):
    birthday: str = Field(..., description="Birth date as YYYY-MM-DD.")
    calculated_at: str = Field(..., description="Reference instant, ISO-8601 with local offset.")
    since_birth: SinceBirth


class BirthdayResult(_ResultBase):
    """Result on the birthday itself: no countdown, ``turning_age`` set."""

    until_next_birthday: None = None
    next_birthday_date: None = None
    is_birthday: Literal[True] = True
    turning_age: int = Field(..., ge=0)


class UpcomingBirthdayResult(_ResultBase):
    """Result on any other day: countdown and next date set, no ``turning_age``."""

    until_next_birthday: UntilNextBirthday
    next_birthday_date: str
    is_birthday: Literal[False] = False
    turning_age: None = None


AgeResult = Union[BirthdayResult, UpcomingBirthdayResult]
