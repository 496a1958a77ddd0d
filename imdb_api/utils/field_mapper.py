import re
from collections import namedtuple
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional, Tuple
from ..errors import InvalidField

# OMDb writes series years with an en-dash, older payloads use a hyphen
YEAR_RANGE = re.compile(r"\d{4}[\-–](?:\d{4})?")
YEAR_SEPARATOR = re.compile(r"[\-–]")
LEADING_YEAR = re.compile(r"^\s*(\d{4})")
DATE_FORMATS = ("%d %b %Y", "%Y-%m-%d")

FieldRule = namedtuple("FieldRule", ["target", "transform"])
SKIP = FieldRule(None, None)


def parse_date(value: Any, field: str) -> date:
    """
    Parse an OMDb date ("13 Sep 2005") or an ISO date ("2005-09-13").

    :param value: Raw payload value.
    :param field: Target attribute name, used in the error message.
    :return: The calendar date.
    :raises InvalidField: When the value is not a valid calendar date.
    """
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidField(field, value)


def parse_int(value: Any, field: str) -> int:
    try:
        return int(str(value).strip(), 10)
    except ValueError:
        raise InvalidField(field, value) from None


def parse_float(value: Any, field: str) -> float:
    try:
        return float(str(value).strip())
    except ValueError:
        raise InvalidField(field, value) from None


def parse_optional_float(value: Any, field: str) -> Optional[float]:
    # unaired episodes report "N/A"
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def parse_year(value: Any, field: str) -> Optional[int]:
    """
    Coerce a title year. Ranges such as "2005–2009" or "2005-" are left for
    the TV show to split and yield ``None`` here.
    """
    if YEAR_RANGE.search(str(value)):
        return None
    return parse_int(value, field)


def leading_year(value: Any, field: str) -> int:
    match = LEADING_YEAR.match(str(value))
    if not match:
        raise InvalidField(field, value)
    return int(match.group(1), 10)


def split_year_range(value: Any) -> Tuple[int, Optional[int]]:
    """
    Split a series year into start and end years.

    :param value: Raw year such as "2005–2009", "2005-" or "2005".
    :return: Tuple of start year and end year, end is ``None`` while ongoing.
    """
    parts = YEAR_SEPARATOR.split(str(value), maxsplit=1)
    start = parse_int(parts[0], "start_year")
    end = None
    if len(parts) > 1:
        try:
            end = int(parts[1].strip(), 10)
        except ValueError:
            end = None
    return start, end


MOVIE_FIELDS: Dict[str, FieldRule] = {
    "Year": FieldRule("year", parse_year),
    "Released": FieldRule("released", parse_date),
    "imdbRating": FieldRule("rating", parse_float),
    "Genre": FieldRule("genres", None),
    "Language": FieldRule("languages", None),
    "imdbVotes": FieldRule("votes", None),
}

EPISODE_FIELDS: Dict[str, FieldRule] = {
    "Title": FieldRule("name", None),
    "Released": FieldRule("released", parse_date),
    "imdbRating": FieldRule("rating", parse_optional_float),
    "Episode": FieldRule("episode", parse_int),
    "Year": FieldRule("year", parse_int),
    "Genre": FieldRule("genres", None),
    "Language": FieldRule("languages", None),
    "imdbVotes": FieldRule("votes", None),
    # season always comes from the caller
    "Season": SKIP,
}

SEARCH_RESULT_FIELDS: Dict[str, FieldRule] = {
    "Year": FieldRule("year", leading_year),
}

SEARCH_PAGE_FIELDS: Dict[str, FieldRule] = {
    "totalResults": FieldRule("totalresults", parse_int),
    "Search": SKIP,
}


def map_fields(payload: Dict[str, Any], table: Dict[str, FieldRule]) -> Dict[str, Any]:
    """
    Apply a field table to a decoded payload in a single pass.

    Listed keys are renamed and coerced according to their rule, keys without
    a rule are lowercased and copied unchanged.

    :param payload: Decoded OMDb JSON object.
    :param table: Mapping of source key to ``FieldRule``.
    :return: Keyword arguments for the record model.
    """
    mapped: Dict[str, Any] = {}
    for key, value in payload.items():
        rule = table.get(key)
        if rule is None:
            mapped[key.lower()] = value
        elif rule.target is None:
            continue
        elif rule.transform is None:
            mapped[rule.target] = value
        else:
            transform: Callable[[Any, str], Any] = rule.transform
            mapped[rule.target] = transform(value, rule.target)
    return mapped
