import pytest

from fintrack.errors import ValidationError
from fintrack.functional import Left, Nothing, Right, Some


def test_maybe_map():
    maybe_value = Some(5)
    doubled = maybe_value.map(lambda x: x * 2)

    assert doubled.is_some()
    assert doubled.get_or_else(0) == 10

    nothing = Nothing()
    mapped_nothing = nothing.map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_either_bind():
    def safe_divide(x: int):
        if x == 0:
            return Left("Division by zero")
        return Right(10 // x)

    assert Right(2).bind(safe_divide) == Right(5)
    assert Right(0).bind(safe_divide).get_error() == "Division by zero"

    left_value = Left("original error")
    result_left = left_value.bind(safe_divide)
    assert result_left.is_left()
    assert result_left.get_error() == "original error"


def test_unwrap_raises_left_error():
    error = ValidationError("amount", "must be greater than zero")
    with pytest.raises(ValidationError) as exc:
        Left(error).unwrap()
    assert exc.value is error

    assert Right(3).unwrap() == 3


def test_right_has_no_error():
    with pytest.raises(ValueError):
        Right(1).get_error()
