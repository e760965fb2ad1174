import pytest
import requests

from mpgnet.data.cars import DATA_URL, Record, clean, fetch_raw_cars, load
from mpgnet.exceptions import FetchError, ParseError

from conftest import FakeResponse, FakeSession


def test_clean_drops_records_with_a_missing_field():
    raw = [
        {"horsepower": 130, "mpg": 18},
        {"horsepower": None, "mpg": 20},
        {"horsepower": 90, "mpg": 30},
    ]
    assert clean(raw) == [Record(130.0, 18.0), Record(90.0, 30.0)]


def test_clean_maps_source_field_names_and_discards_the_rest(raw_cars):
    cleaned = clean(raw_cars)
    assert cleaned == [
        Record(130.0, 18.0),
        Record(165.0, 15.0),
        Record(95.0, 24.0),
        Record(88.0, 27.0),
        Record(46.0, 26.0),
    ]
    assert all(isinstance(r.horsepower, float) and isinstance(r.mpg, float) for r in cleaned)


def test_clean_is_idempotent(raw_cars):
    once = clean(raw_cars)
    assert clean(once) == once
    assert clean([r._asdict() for r in once]) == once


def test_clean_keeps_zero_values():
    assert clean([{"Horsepower": 0, "Miles_per_Gallon": 0}]) == [Record(0.0, 0.0)]


def test_clean_rejects_non_objects():
    with pytest.raises(ParseError):
        clean([{"Horsepower": 1, "Miles_per_Gallon": 2}, "not a car"])


def test_clean_rejects_non_numeric_values():
    with pytest.raises(ParseError):
        clean([{"Horsepower": "lots", "Miles_per_Gallon": 2}])


def test_load_makes_exactly_one_request(fake_session):
    records = load(url="http://example.com/cars.json", timeout=5, session=fake_session)
    assert len(records) == 5
    assert fake_session.calls == [("http://example.com/cars.json", 5)]


def test_fetch_uses_the_default_url(fake_session):
    fetch_raw_cars(session=fake_session)
    assert fake_session.calls[0][0] == DATA_URL


def test_fetch_error_on_http_failure():
    session = FakeSession(FakeResponse(status_code=503))
    with pytest.raises(FetchError):
        fetch_raw_cars(session=session)


def test_fetch_error_when_unreachable():
    session = FakeSession(error=requests.ConnectionError("no route to host"))
    with pytest.raises(FetchError):
        load(session=session)


def test_fetch_error_on_timeout():
    session = FakeSession(error=requests.Timeout("too slow"))
    with pytest.raises(FetchError):
        load(session=session)


def test_parse_error_on_invalid_json():
    session = FakeSession(FakeResponse(text="<html>not json</html>"))
    with pytest.raises(ParseError):
        fetch_raw_cars(session=session)


def test_parse_error_when_payload_is_not_a_list():
    session = FakeSession(FakeResponse({"cars": []}))
    with pytest.raises(ParseError):
        load(session=session)


@pytest.mark.parametrize(
    "horsepower, mpg",
    [("nan", 18), (130, "inf"), (float("nan"), 18), (130, float("-inf")), (True, 18), (130, False)],
)
def test_clean_rejects_non_finite_and_boolean_values(horsepower, mpg):
    with pytest.raises(ParseError):
        clean([{"Horsepower": 90, "Miles_per_Gallon": 30}, {"Horsepower": horsepower, "Miles_per_Gallon": mpg}])


def test_clean_rejects_records_built_with_non_finite_values():
    with pytest.raises(ParseError):
        clean([Record(float("nan"), 18.0)])


def test_clean_accepts_numeric_strings():
    assert clean([{"Horsepower": "130", "Miles_per_Gallon": "18.5"}]) == [Record(130.0, 18.5)]
