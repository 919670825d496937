import pytest

from adxops.core.paging import iter_pages


def test_iter_pages_flattens_pages_in_order():
    assert list(iter_pages([[1, 2], [], [3]])) == [1, 2, 3]


def test_iter_pages_fetches_pages_on_demand():
    fetched: list[int] = []

    def pages():
        for n in range(3):
            fetched.append(n)
            yield [n]

    items = iter_pages(pages())
    assert fetched == []

    assert next(items) == 0
    assert fetched == [0]


def test_iter_pages_is_not_restartable():
    items = iter_pages([["a"], ["b"]])

    assert list(items) == ["a", "b"]
    assert list(items) == []


def test_iter_pages_propagates_page_errors():
    def pages():
        yield [1]
        raise RuntimeError("page 2 failed")

    items = iter_pages(pages())

    assert next(items) == 1
    with pytest.raises(RuntimeError, match="page 2 failed"):
        next(items)
