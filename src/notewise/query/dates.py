"""Date-reference parsing for natural-language queries.

Recognizes relative phrases ("yesterday", "last week", "3 days ago",
"last friday") and absolute dates ("2024-03-05", "3/5/2024", "March 5",
"5th of March 2024"). The match that starts earliest in the text wins.
"""

import calendar
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

MONTHS: dict[str, int] = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sept": 9,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

NUMBER_WORDS: dict[str, int] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_WEEKDAY = "|".join(WEEKDAYS)
_NUMBER = r"\d+|" + "|".join(sorted(NUMBER_WORDS, key=len, reverse=True))
_ORDINAL = r"(?:st|nd|rd|th)?"


@dataclass
class DateReference:
    """A point in time parsed from free text.

    Attributes:
        value: Resolved timestamp (timezone-aware)
        text: Phrase that produced it
        start: Offset of the phrase in the source text
    """

    value: datetime
    text: str
    start: int


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def shift_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _shift(moment: datetime, unit: str, amount: int) -> datetime:
    """Move moment back or forward by amount of a calendar unit."""
    unit = unit.lower()
    if unit == "minute":
        return moment + timedelta(minutes=amount)
    if unit == "hour":
        return moment + timedelta(hours=amount)
    if unit == "day":
        return moment + timedelta(days=amount)
    if unit == "week":
        return moment + timedelta(weeks=amount)
    if unit == "month":
        return shift_months(moment, amount)
    if unit == "year":
        return shift_months(moment, 12 * amount)
    raise ValueError(f"Unknown unit: {unit}")


def _date_or_none(now: datetime, year: int, month: int, day: int) -> datetime | None:
    try:
        return datetime(year, month, day, tzinfo=now.tzinfo)
    except ValueError:
        return None


def _date_without_year(now: datetime, month: int, day: int) -> datetime | None:
    """Resolve a month/day to this year, or last year if that is still ahead."""
    value = _date_or_none(now, now.year, month, day)
    if value is not None and value > now:
        value = _date_or_none(now, now.year - 1, month, day)
    return value


def _resolve_day_before_yesterday(match: re.Match, now: datetime) -> datetime:
    return _start_of_day(now - timedelta(days=2))


def _resolve_yesterday(match: re.Match, now: datetime) -> datetime:
    return _start_of_day(now - timedelta(days=1))


def _resolve_today(match: re.Match, now: datetime) -> datetime:
    return _start_of_day(now)


def _resolve_tomorrow(match: re.Match, now: datetime) -> datetime:
    return _start_of_day(now + timedelta(days=1))


def _resolve_last_period(match: re.Match, now: datetime) -> datetime:
    return _start_of_day(_shift(now, match.group(1), -1))


def _resolve_this_period(match: re.Match, now: datetime) -> datetime:
    unit = match.group(1).lower()
    today = _start_of_day(now)
    if unit == "week":
        return today - timedelta(days=today.weekday())
    if unit == "month":
        return today.replace(day=1)
    return today.replace(month=1, day=1)


def _resolve_ago(match: re.Match, now: datetime) -> datetime | None:
    amount_text = match.group(1).lower()
    amount = NUMBER_WORDS.get(amount_text) or int(amount_text)
    unit = match.group(2).lower()
    try:
        moment = _shift(now, unit, -amount)
    except (ValueError, OverflowError):
        logger.debug(f"Ignoring out-of-range offset '{match.group(0)}'")
        return None
    if unit in ("minute", "hour"):
        return moment
    return _start_of_day(moment)


def _resolve_weekday(match: re.Match, now: datetime) -> datetime:
    target = WEEKDAYS.index(match.group(2).lower())
    days_back = (now.weekday() - target) % 7
    if match.group(1) and days_back == 0:
        days_back = 7
    return _start_of_day(now - timedelta(days=days_back))


def _resolve_iso(match: re.Match, now: datetime) -> datetime | None:
    return _date_or_none(now, int(match.group(1)), int(match.group(2)), int(match.group(3)))


def _resolve_us_numeric(match: re.Match, now: datetime) -> datetime | None:
    return _date_or_none(now, int(match.group(3)), int(match.group(1)), int(match.group(2)))


def _resolve_month_day(match: re.Match, now: datetime) -> datetime | None:
    month = MONTHS[match.group(1).lower()]
    day = int(match.group(2))
    if match.group(3):
        return _date_or_none(now, int(match.group(3)), month, day)
    return _date_without_year(now, month, day)


def _resolve_day_month(match: re.Match, now: datetime) -> datetime | None:
    day = int(match.group(1))
    month = MONTHS[match.group(2).lower()]
    if match.group(3):
        return _date_or_none(now, int(match.group(3)), month, day)
    return _date_without_year(now, month, day)


Resolver = Callable[[re.Match, datetime], datetime | None]

# Rule order breaks ties between matches starting at the same offset
DATE_RULES: list[tuple[str, Resolver]] = [
    (r"\b(?:the\s+)?day\s+before\s+yesterday\b", _resolve_day_before_yesterday),
    (r"\byesterday\b", _resolve_yesterday),
    (r"\b(?:today|tonight|this\s+(?:morning|afternoon|evening))\b", _resolve_today),
    (r"\btomorrow\b", _resolve_tomorrow),
    (r"\b(?:last|past|previous)\s+(week|month|year)\b", _resolve_last_period),
    (r"\bthis\s+(week|month|year)\b", _resolve_this_period),
    (rf"\b({_NUMBER})\s+(minute|hour|day|week|month|year)s?\s+ago\b", _resolve_ago),
    (rf"\b(?:(last|past|previous)\s+)?({_WEEKDAY})\b", _resolve_weekday),
    (r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b", _resolve_iso),
    (r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b", _resolve_us_numeric),
    (rf"\b({_MONTH})\.?\s+(\d{{1,2}}){_ORDINAL}(?:,?\s+(\d{{4}}))?\b", _resolve_month_day),
    (rf"\b(\d{{1,2}}){_ORDINAL}\s+(?:of\s+)?({_MONTH})\b(?:,?\s+(\d{{4}}))?", _resolve_day_month),
]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class DateReferenceParser:
    """Extracts the first date reference from free text.

    Pure apart from reading the clock; relative phrases are resolved
    against the supplied or current time, in that time's timezone.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize the parser.

        Args:
            clock: Returns the current timezone-aware time (defaults to local now)
        """
        self._clock = clock or _local_now
        self._rules = [
            (re.compile(pattern, re.IGNORECASE), resolver)
            for pattern, resolver in DATE_RULES
        ]

    def parse(self, text: str, now: datetime | None = None) -> DateReference | None:
        """Parse the earliest date reference in text.

        Args:
            text: Free text such as a search query
            now: Reference time (defaults to the parser clock)

        Returns:
            DateReference, or None if the text contains no date
        """
        if not text or not text.strip():
            return None

        now = now or self._clock()
        candidates: list[tuple[int, int, int, DateReference]] = []

        for order, (pattern, resolver) in enumerate(self._rules):
            for match in pattern.finditer(text):
                value = resolver(match, now)
                if value is None:
                    continue
                reference = DateReference(
                    value=value, text=match.group(0), start=match.start()
                )
                candidates.append((match.start(), -len(match.group(0)), order, reference))
                break

        if not candidates:
            return None

        reference = min(candidates, key=lambda c: c[:3])[3]
        logger.debug(f"Parsed date '{reference.text}' as {reference.value.isoformat()}")
        return reference


def parse_date_reference(text: str, now: datetime | None = None) -> DateReference | None:
    """Parse text with a default DateReferenceParser."""
    return DateReferenceParser().parse(text, now=now)


__all__ = [
    "DATE_RULES",
    "DateReference",
    "DateReferenceParser",
    "parse_date_reference",
    "shift_months",
]
