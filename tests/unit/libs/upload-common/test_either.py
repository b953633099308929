# tests/unit/libs/upload-common/test_either.py
import pytest

from upload_common.either import Err, Ok, UnwrapError, is_err, is_ok, unwrap, unwrap_err


def test_ok_exposes_value_through_discriminant_helpers():
    result = Ok(42)

    assert is_ok(result)
    assert not is_err(result)
    assert result.is_ok() and not result.is_err()
    assert unwrap(result) == 42


def test_err_exposes_error_through_discriminant_helpers():
    result = Err("boom")

    assert is_err(result)
    assert not is_ok(result)
    assert result.is_err() and not result.is_ok()
    assert unwrap_err(result) == "boom"


def test_unwrap_on_err_fails_loudly():
    """
    GIVEN an Err result
    WHEN its payload is read without checking the discriminant
    THEN it should raise instead of returning an empty value.
    """
    result = Err("store down")

    with pytest.raises(UnwrapError, match="store down"):
        unwrap(result)
    with pytest.raises(AttributeError):
        result.value  # noqa: B018


def test_unwrap_err_on_ok_fails_loudly():
    with pytest.raises(UnwrapError):
        unwrap_err(Ok([]))


def test_unwrap_rejects_non_result_values():
    with pytest.raises(TypeError):
        unwrap(None)


def test_results_are_immutable_and_compare_by_value():
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    with pytest.raises(Exception):
        Ok(1).value = 2
