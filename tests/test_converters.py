from inidoc import NumericFormatError
from inidoc.type_converters.converters import (
    bool_converter,
    to_int,
    to_float,
    to_ini_string,
    convert_optional,
    DEFAULT_BOOL_CONVERTER,
)
import pytest


class TestConverters:

    @pytest.mark.parametrize(
        "string,expected", [("0", 0), ("-12", -12), ("+7", 7), (" 42 ", 42), (str(2**63), 2**63)]
    )
    def test_int(self, string, expected):
        assert to_int(string) == expected

    @pytest.mark.parametrize("string", ["", "1.0", "1e3", "0x10", "1_000", "one"])
    def test_int_invalid(self, string):
        with pytest.raises(NumericFormatError) as e:
            to_int(string)
        assert e.value.target_type == "int"
        assert isinstance(e.value, ValueError)

    @pytest.mark.parametrize(
        "string,expected", [("1.5", 1.5), ("-0.25", -0.25), ("1e3", 1000.0), ("3", 3.0)]
    )
    def test_float(self, string, expected):
        assert to_float(string) == expected

    @pytest.mark.parametrize("string", ["", "1,5", "1_0.0", "abc"])
    def test_float_invalid(self, string):
        with pytest.raises(NumericFormatError):
            to_float(string)

    @pytest.mark.parametrize("string", ["true", "True", "YES", "y", "1", "on", " true "])
    def test_bool_true(self, string):
        assert DEFAULT_BOOL_CONVERTER(string) is True

    @pytest.mark.parametrize("string", ["false", "FALSE", "no", "N", "0", "off"])
    def test_bool_false(self, string):
        assert DEFAULT_BOOL_CONVERTER(string) is False

    def test_bool_invalid(self):
        with pytest.raises(NumericFormatError) as e:
            DEFAULT_BOOL_CONVERTER("2")
        assert e.value.value == "2"
        assert e.value.target_type == "bool"

    def test_custom_bool_converter(self):
        convert = bool_converter(true="Ja", false=("Nein", "Nee"))
        assert convert("ja") is True
        assert convert("NEE") is False
        with pytest.raises(NumericFormatError):
            convert("true")

    @pytest.mark.parametrize(
        "value,expected",
        [(True, "true"), (False, "false"), (5, "5"), (-1, "-1"), (0.1, "0.1"), ("s", "s")],
    )
    def test_to_ini_string(self, value, expected):
        assert to_ini_string(value) == expected

    def test_to_ini_string_unsupported(self):
        with pytest.raises(TypeError):
            to_ini_string([1, 2])

    def test_convert_optional(self):
        assert convert_optional(None, to_int) is None
        assert convert_optional("3", to_int) == 3
