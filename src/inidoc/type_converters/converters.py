"""Converter functions between stored strings and typed values."""

from functools import wraps
from typing import Callable
from ..exceptions_warnings import NumericFormatError

type ScalarTypes = int | float | bool
"""Possible conversion result types."""

type TypeConverter[ConvertedType] = Callable[[str], ConvertedType]
"""Type of type converter functions. To create a type converter, use converter
decorator."""


class WrongType(Exception):
    """Raised by a processor if its input can't be converted."""


def converter[T](type_name: str) -> Callable[[Callable[[str], T]], TypeConverter[T]]:
    """Create a new TypeConverter from a processor function.

    Args:
        type_name (str): Name of the target type used in error messages.

    Returns:
        Callable: Decorator taking the processor. The processor should raise WrongType
            or ValueError if conversion is not possible.
    """

    def decorator(processor: Callable[[str], T]) -> TypeConverter[T]:
        @wraps(processor)
        def convert(value: str) -> T:
            """Convert value.

            Raises:
                NumericFormatError: If the value can't be converted.
            """
            try:
                return processor(value)
            except (WrongType, ValueError) as e:
                raise NumericFormatError(value, type_name) from e

        return convert

    return decorator


def bool_converter(
    true: str | tuple[str, ...] = ("true", "1", "yes", "y", "on"),
    false: str | tuple[str, ...] = ("false", "0", "no", "n", "off"),
) -> TypeConverter[bool]:
    """Create a new bool converter.

    Args:
        true (str | tuple[str, ...], optional): String(s) that should be regarded as True.
            Defaults to ("true", "1", "yes", "y", "on").
        false (str | tuple[str, ...], optional): String(s) that should be regarded as
            False. Defaults to ("false", "0", "no", "n", "off").

    Returns:
        TypeConverter[bool]: The bool converter.
    """

    if not isinstance(true, tuple):
        true = (true,)
    true = tuple(i.lower() for i in true)

    if not isinstance(false, tuple):
        false = (false,)
    false = tuple(i.lower() for i in false)

    @converter("bool")
    def to_bool(string: str) -> bool:
        string = string.lower().strip()
        if string in true:
            return True
        elif string in false:
            return False
        raise WrongType

    return to_bool


@converter("int")
def to_int(string: str) -> int:
    # int() would also accept "1_000"
    if "_" in string:
        raise WrongType
    return int(string)


@converter("float")
def to_float(string: str) -> float:
    if "_" in string:
        raise WrongType
    return float(string)


def to_ini_string(value: ScalarTypes | str) -> str:
    """Canonical string form of a typed value.

    Args:
        value (ScalarTypes | str): The value to convert.

    Returns:
        str: "true"/"false" for booleans, the shortest round-tripping representation
            for numbers and the value itself for strings.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise TypeError(f"Can't convert {type(value).__name__} to an ini value.")


DEFAULT_STRING_CONVERTER: TypeConverter[str] = str
"""String converter (identity)."""
DEFAULT_BOOL_CONVERTER = bool_converter()
"""Bool converter with default conversion parameters."""
DEFAULT_INT_CONVERTER = to_int
"""Integer converter."""
DEFAULT_FLOAT_CONVERTER = to_float
"""Float converter."""


def convert_optional[T](value: str | None, type_converter: TypeConverter[T]) -> T | None:
    """Convert value with type_converter unless it is None."""
    return None if value is None else type_converter(value)
