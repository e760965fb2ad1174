import matplotlib

matplotlib.use("Agg")

import pytest
import requests
from matplotlib import pyplot as plt

#
# ~~~ A few records in the shape served by the real endpoint (other fields trimmed)
RAW_CARS = [
    {"Name": "chevrolet chevelle malibu", "Miles_per_Gallon": 18, "Horsepower": 130},
    {"Name": "buick skylark 320", "Miles_per_Gallon": 15, "Horsepower": 165},
    {"Name": "citroen ds-21 pallas", "Miles_per_Gallon": None, "Horsepower": 115},
    {"Name": "ford pinto", "Miles_per_Gallon": 25, "Horsepower": None},
    {"Name": "toyota corona mark ii", "Miles_per_Gallon": 24, "Horsepower": 95},
    {"Name": "datsun pl510", "Miles_per_Gallon": 27, "Horsepower": 88},
    {"Name": "amc hornet", "Horsepower": 97},
    {"Name": "volkswagen 1131 deluxe sedan", "Miles_per_Gallon": 26, "Horsepower": 46},
]


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.text is not None:
            raise requests.JSONDecodeError("Expecting value", self.text, 0)
        return self.payload


#
# ~~~ Stands in for `requests` (or a `requests.Session`): records each call and answers with a canned response
class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def raw_cars():
    return [dict(car) for car in RAW_CARS]


@pytest.fixture
def fake_session(raw_cars):
    return FakeSession(FakeResponse(raw_cars))


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
