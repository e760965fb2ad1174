import math
from typing import NamedTuple

import requests

from mpgnet.exceptions import FetchError, ParseError

#
# ~~~ Where the raw car data lives (a json array of objects, one per car model)
DATA_URL = "https://storage.googleapis.com/tfjs-tutorials/carsData.json"

#
# ~~~ For each field we keep, the names under which it may appear in a raw record (the source schema first)
FIELD_NAMES = {
    "horsepower": ("Horsepower", "horsepower"),
    "mpg": ("Miles_per_Gallon", "mpg"),
}


class Record(NamedTuple):
    horsepower: float
    mpg: float


#
# ~~~ Download the raw records
def fetch_raw_cars(url=DATA_URL, timeout=30.0, session=None):
    """
    Perform a single GET request against `url` and return the decoded json array.

    Raises `FetchError` if the server can't be reached or answers with a
    non-success status, and `ParseError` if the body is not a json array.
    """
    getter = requests if session is None else session
    try:
        response = getter.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Unable to fetch the car data from {url}: {e}") from e
    try:
        payload = response.json()
    except ValueError as e:
        raise ParseError(f"The response from {url} is not valid json: {e}") from e
    if not isinstance(payload, list):
        raise ParseError(
            f"Expected a json array of car records from {url}, got {type(payload).__name__}"
        )
    return payload


#
# ~~~ Look up a field under any of its known names, returning None if it is absent
def _get_field(raw_record, field):
    for name in FIELD_NAMES[field]:
        value = raw_record.get(name)
        if value is not None:
            return value
    return None


#
# ~~~ Only real, finite numbers count as a field value (booleans, "nan" and "inf" do not)
def _to_number(value, i):
    if isinstance(value, bool):
        raise ParseError(f"Record {i} has a boolean where a number was expected")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Record {i} has a non-numeric field: {e}") from e
    if not math.isfinite(number):
        raise ParseError(f"Record {i} has a non-finite field: {value!r}")
    return number


#
# ~~~ Reduce the raw records to (horsepower, mpg) pairs, dropping any record where either is missing
def clean(raw_records):
    cleaned = []
    for i, raw_record in enumerate(raw_records):
        if isinstance(raw_record, Record):
            raw_record = raw_record._asdict()
        if not isinstance(raw_record, dict):
            raise ParseError(
                f"Record {i} is a {type(raw_record).__name__}, not a json object"
            )
        horsepower = _get_field(raw_record, "horsepower")
        mpg = _get_field(raw_record, "mpg")
        if horsepower is None or mpg is None:
            continue
        cleaned.append(
            Record(horsepower=_to_number(horsepower, i), mpg=_to_number(mpg, i))
        )
    return cleaned


def load(url=DATA_URL, timeout=30.0, session=None):
    return clean(fetch_raw_cars(url=url, timeout=timeout, session=session))
