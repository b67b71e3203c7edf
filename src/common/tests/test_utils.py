import pytest

from common.utils import is_valid_ulid, new_ulid


def test_new_ulid_is_valid() -> None:
    value = new_ulid()

    assert len(value) == 26
    assert is_valid_ulid(value)


def test_new_ulid_is_unique() -> None:
    assert len({new_ulid() for _ in range(100)}) == 100


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-a-ulid",
        "01arz3ndektsv4rrffq69g5fav",  # lowercase
        "01ARZ3NDEKTSV4RRFFQ69G5FA",  # too short
        "01ARZ3NDEKTSV4RRFFQ69G5FAVX",  # too long
        "01ARZ3NDEKTSV4RRFFQ69G5FIL",  # I and L are not Crockford base32
        None,
        12345,
    ],
)
def test_is_valid_ulid_rejects_invalid_values(value: object) -> None:
    assert is_valid_ulid(value) is False


def test_is_valid_ulid_accepts_canonical_ulid() -> None:
    assert is_valid_ulid("01ARZ3NDEKTSV4RRFFQ69G5FAV")
