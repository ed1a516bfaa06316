# tests/common/test_preprocessing.py

import math

import pandas as pd
import pytest

from health_engine.common import Preprocessor, parse_numeric


@pytest.mark.parametrize(
    "value,expected",
    [
        ("42", 42.0),
        (" 0.25 ", 0.25),
        ("-3.5", -3.5),
        ("1e2", 100.0),
        (7, 7.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        # strict parse: a numeric prefix is not enough
        ("12abc", 0.0),
        ("3.5 kg", 0.0),
    ],
)
def test_parse_numeric(value, expected):
    assert parse_numeric(value) == expected


def test_parse_numeric_custom_default():
    assert parse_numeric("oops", default=-1.0) == -1.0


def test_coerce_numeric_substitutes_zero():
    preprocessor = Preprocessor()
    frame = preprocessor.to_frame([{"v": "1.5"}, {"v": "bad"}, {"v": ""}, {}])

    assert list(preprocessor.coerce_numeric(frame, "v")) == [1.5, 0.0, 0.0, 0.0]


def test_parse_bounded_keeps_nan():
    preprocessor = Preprocessor()
    frame = preprocessor.to_frame([{"v": "0.5"}, {"v": "bad"}])
    values = list(preprocessor.parse_bounded(frame, "v"))

    assert values[0] == 0.5
    assert math.isnan(values[1])


def test_missing_column_yields_zeros():
    preprocessor = Preprocessor()
    frame = preprocessor.to_frame([{"a": "1"}, {"a": "2"}])

    assert list(preprocessor.coerce_numeric(frame, "missing")) == [0.0, 0.0]


def test_to_frame_adds_required_columns():
    frame = Preprocessor().to_frame([{"a": "1"}], columns=["a", "b"])

    assert list(frame.columns) == ["a", "b"]
    assert pd.isna(frame.loc[0, "b"])


def test_normalize_categories():
    preprocessor = Preprocessor(unknown_label="n/a")
    frame = preprocessor.to_frame([{"t": "Gold"}, {"t": ""}, {}])

    assert list(preprocessor.normalize_categories(frame, "t")) == ["Gold", "n/a", "n/a"]


def test_trailing_text_is_not_parsed_as_prefix():
    preprocessor = Preprocessor()
    frame = preprocessor.to_frame([{"v": "12abc"}, {"v": "12"}])

    assert parse_numeric("12abc") == 0.0
    assert list(preprocessor.coerce_numeric(frame, "v")) == [0.0, 12.0]
