import re

import pytest

from intake.ids import TimestampIdGenerator, UuidIdGenerator


def test_timestamp_id_shape():
    gen = TimestampIdGenerator(suffix_length=5, clock=lambda: 1718900000.5)
    nid = gen.next_id()
    assert nid.startswith("1718900000500")
    assert re.fullmatch(r"\d{13}[0-9a-z]{5}", nid)


def test_timestamp_ids_are_distinct_within_one_millisecond():
    gen = TimestampIdGenerator(suffix_length=8, clock=lambda: 1.0)
    ids = {gen.next_id() for _ in range(500)}
    assert len(ids) == 500


def test_suffix_length_must_be_positive():
    with pytest.raises(ValueError):
        TimestampIdGenerator(suffix_length=0)


def test_uuid_ids():
    gen = UuidIdGenerator()
    a, b = gen.next_id(), gen.next_id()
    assert a != b
    assert len(a) == 32
