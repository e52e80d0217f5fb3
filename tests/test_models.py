import datetime
import itertools

import pytest

from contrib_drawer.models import CommitSpec, DrawError, ErrorKind, GridError, ParseResult, RotatingPool


def test_pool_cycles_in_order():
    pool = RotatingPool(["a", "b", "c"])
    assert [pool.next() for _ in range(6)] == ["a", "b", "c", "a", "b", "c"]


def test_pool_single_value_repeats():
    pool = RotatingPool(["only"])
    assert [pool.next() for _ in range(3)] == ["only"] * 3


def test_pool_rejects_empty_list():
    with pytest.raises(ValueError):
        RotatingPool([])


def test_pool_is_an_endless_iterator():
    pool = RotatingPool(("x", "y"))
    assert list(itertools.islice(pool, 5)) == ["x", "y", "x", "y", "x"]
    assert len(pool) == 2


def test_pool_keeps_its_own_copy():
    values = ["a", "b"]
    pool = RotatingPool(values)
    values.clear()
    assert pool.next() == "a"


def test_commit_timestamp_pads_minutes():
    commit = CommitSpec("n", "e", "m", datetime.date(2024, 3, 10), 7)
    assert commit.timestamp == "2024-03-10 10:07:00"


def test_parse_result_unwrap():
    assert ParseResult(grid=((1,),)).unwrap() == ((1,),)

    failed = ParseResult(error=GridError(ErrorKind.RAGGED_GRID, "source lines differ in length"))
    assert not failed.ok
    with pytest.raises(DrawError) as excinfo:
        failed.unwrap()
    assert excinfo.value.kind is ErrorKind.RAGGED_GRID
    assert str(excinfo.value) == "source lines differ in length"
