from inidoc import (
    IniFile,
    loads,
    IniFormatError,
    InvalidParameterError,
    FileAlreadyLoadedError,
    FileNotLoadedError,
    DuplicateKeyWarning,
    DuplicateSectionWarning,
    Parameters,
)
from .base import Base
from pathlib import Path
import warnings
import logging
import pytest

EMPLOYEES = """Home=Newtown

[Employees]
001=Fred Smith
; Good worker
Comments=see above
"""


class TestRead:

    def test_employees(self):
        doc = loads(EMPLOYEES)
        assert doc.get_string_g("Home", "") == "Newtown"
        assert doc.get_string("Employees", "001", "") == "Fred Smith"
        assert doc.get_comment("Employees", "Comments") == "; Good worker"
        assert doc.get_comment("Employees", "001") is None
        assert doc.get_sections() == [None, "Employees"]

    def test_generated_content(self):
        base = Base()
        base.add_option()
        base.add_option(comment="# global option")
        base.add_blank()
        base.add_section(comment="; section comment")
        base.add_option()
        base.add_option(comment="; about this one")
        base.add_section()
        base.add_blank()
        base.add_option(value="")
        base.verify(loads(base.content))

    def test_padded_content(self):
        base = Base(padded_equals=True)
        base.add_section()
        base.add_option()
        base.add_option(comment="# c")
        base.verify(loads(base.content))

    def test_invalid_line(self):
        with pytest.raises(IniFormatError) as e:
            loads("not a valid line!!")
        assert e.value.line_number == 1
        assert e.value.line == "not a valid line!!"
        assert "line# 1" in str(e.value)

    def test_invalid_line_number(self):
        base = Base()
        base.add_section()
        base.add_option()
        base.add_comment()
        line_number = base.add_invalid_entity()
        base.add_option()
        with pytest.raises(IniFormatError) as e:
            loads(base.content, source="generated.ini")
        assert e.value.line_number == line_number
        assert e.value.source == "generated.ini"
        assert str(e.value).startswith("generated.ini: ")

    @pytest.mark.parametrize("line", ["  =value", "#no-space", "[s] x", "\t# indented"])
    def test_format_errors(self, line):
        with pytest.raises(IniFormatError):
            loads(f"[s]\n{line}\n")

    def test_comment_association(self):
        text = (
            "; global standalone\n"
            "\n"
            "# first\n"
            "# second\n"
            "k=v\n"
            "\n"
            "; about s\n"
            "[s]\n"
            "# dangling\n"
        )
        doc = loads(text)
        assert doc.get_standalone_comments(None) == ["; global standalone", "# first"]
        assert doc.get_comment(None, "k") == "# second"
        assert doc.get_section_comment("s") == "; about s"
        assert doc.get_standalone_comments("s") == ["# dangling"]
        # synthetic keys use the comment's line number
        assert [e.key for e in doc.get_section(None)] == [";1", "#3", "k"]
        assert [e.key for e in doc.get_section("s")] == ["#9"]

    def test_comment_before_blank_is_standalone(self):
        doc = loads("[s]\n; alone\n\nk=v\n")
        assert doc.get_comment("s", "k") is None
        assert doc.get_standalone_comments("s") == ["; alone"]

    def test_values_and_keys_are_stripped(self):
        doc = loads("[ spaced ]\n  key  =  some value  \nurl=http://x/?a=b\nempty=\n")
        assert doc.get_sections() == [None, "spaced"]
        assert doc.get_string("spaced", "key") == "some value"
        assert doc.get_string("spaced", "url") == "http://x/?a=b"
        assert doc.get_string("spaced", "empty", None) == ""

    def test_crlf_and_bom(self):
        doc = loads("\ufeff[s]\r\n; c\r\nk=v\r\n")
        assert doc.get_sections() == [None, "s"]
        assert doc.get_string("s", "k") == "v"
        assert doc.get_comment("s", "k") == "; c"

    def test_whitespace_lines(self):
        text = "[s]\n; c\n \t \nk=v\n"
        doc = loads(text)
        assert doc.get_comment("s", "k") is None
        assert doc.get_standalone_comments("s") == ["; c"]
        with pytest.raises(IniFormatError) as e:
            loads(text, ignore_whitespace_lines=False)
        assert e.value.line_number == 3

    def test_duplicate_key_warning(self):
        with pytest.warns(DuplicateKeyWarning):
            doc = loads("[s]\nk=1\nk=2\n")
        assert doc.get_string("s", "k") == "2"
        assert doc.get_keys("s") == ["k"]

    def test_duplicate_section_warning(self):
        with pytest.warns(DuplicateSectionWarning):
            doc = loads("; first\n[s]\na=1\n[t]\n[s]\nb=2\n")
        assert doc.get_sections() == [None, "s", "t"]
        assert doc.get_keys("s") == ["a", "b"]
        # re-declaration without comment keeps the comment
        assert doc.get_section_comment("s") == "; first"

    def test_no_warnings_when_disabled(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            loads("[s]\nk=1\nk=2\n[s]\n", warn_duplicates=False)

    def test_same_key_in_other_section_is_no_duplicate(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            doc = loads("k=0\n[a]\nk=1\n[b]\nk=2\n")
        assert [doc.get_string(s, "k") for s in doc] == ["0", "1", "2"]


class TestIniFile:

    def test_load_and_verify(self, tmp_path: Path):
        base = Base()
        base.add_option(comment="; top")
        base.add_blank()
        base.add_section(comment="# named")
        base.add_option()
        path = base.export(tmp_path)

        ini = IniFile(path)
        assert not ini.loaded
        assert ini.load() is ini
        assert ini.loaded
        base.verify(ini.document)

    def test_load_str_path(self, tmp_path: Path):
        path = tmp_path / "a.ini"
        path.write_text(EMPLOYEES, encoding="utf-8")
        ini = IniFile(str(path)).load()
        assert ini.document.get_string("Employees", "001") == "Fred Smith"

    def test_load_twice(self, tmp_path: Path):
        path = tmp_path / "a.ini"
        path.write_text(EMPLOYEES, encoding="utf-8")
        ini = IniFile(path).load()
        with pytest.raises(FileAlreadyLoadedError):
            ini.load()
        with pytest.raises(FileAlreadyLoadedError):
            ini.load_string("k=v")

    def test_merge(self, tmp_path: Path):
        first = tmp_path / "first.ini"
        second = tmp_path / "second.ini"
        first.write_text("a=1\n[s]\n; old\nk=old\n", encoding="utf-8")
        second.write_text("a=2\n[s]\nk2=new\n[t]\nx=y\n", encoding="utf-8")

        ini = IniFile(first)
        with pytest.raises(FileNotLoadedError):
            ini.merge(second)
        with pytest.raises(FileNotLoadedError):
            ini.merge_string("b=1")

        ini.load().merge(second).merge_string("[s]\nk=newer\n")
        doc = ini.document
        assert doc.get_sections() == [None, "s", "t"]
        assert doc.get_string_g("a") == "2"
        assert doc.get_keys("s") == ["k", "k2"]
        assert doc.get_string("s", "k") == "newer"
        assert doc.get_string("t", "x") == "y"

    def test_merge_error_names_source(self, tmp_path: Path):
        other = tmp_path / "other.ini"
        other.write_text("[s]\noops\n", encoding="utf-8")
        ini = IniFile().load_string("k=v")
        with pytest.raises(IniFormatError) as e:
            ini.merge(other)
        assert e.value.source == str(other)
        assert e.value.line_number == 2

    def test_save(self, tmp_path: Path):
        path = tmp_path / "a.ini"
        path.write_text(EMPLOYEES, encoding="utf-8")
        ini = IniFile(path).load()
        ini.document.set_int("Employees", "count", 1, "; number of employees")
        ini.save()

        reloaded = IniFile(path).load().document
        assert reloaded.get_int("Employees", "count", 0) == 1
        assert reloaded.get_comment("Employees", "count") == "; number of employees"
        assert reloaded.get_comment("Employees", "Comments") == "; Good worker"
        assert path.read_text(encoding="utf-8") == ini.to_string()

    def test_save_as_crlf_padded(self, tmp_path: Path):
        ini = IniFile(newline="\r\n", padded_equals=True).load_string(EMPLOYEES)
        dest = tmp_path / "out.ini"
        ini.save_as(dest)
        raw = dest.read_bytes()
        assert raw.startswith(b"Home = Newtown\r\n")
        assert ini.path is None
        assert IniFile(dest).load().document.get_string("Employees", "001") == "Fred Smith"

    def test_no_path(self):
        ini = IniFile()
        with pytest.raises(ValueError):
            ini.load()
        ini.load_string("k=v")
        with pytest.raises(ValueError):
            ini.save()

    @pytest.mark.parametrize("path", ["", "   "])
    def test_blank_path(self, path):
        with pytest.raises(InvalidParameterError):
            IniFile(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            IniFile(tmp_path / "missing.ini").load()

    def test_parameters_are_copied(self):
        parameters = Parameters()
        ini = IniFile(parameters=parameters, padded_equals=True)
        assert ini.parameters.padded_equals
        assert not parameters.padded_equals

    def test_unknown_parameter(self):
        with pytest.raises(TypeError):
            IniFile(unknown=True)

    def test_str(self):
        ini = IniFile("x.ini")
        assert "x.ini" in str(ini)
        assert "loaded=False" in str(ini)


class TestEncoding:

    def test_detected_encoding(self, tmp_path: Path):
        text = (
            "; Übersicht der Mitarbeiter und ihrer Wohnorte in Süddeutschland\n"
            "[Mitarbeiter]\n"
            "Name=Jürgen Müller\n"
            "Ort=Überlingen am Bodensee, Größe: mittel\n"
            "Straße=Hauptstraße 12\n"
        )
        path = tmp_path / "latin.ini"
        path.write_bytes(text.encode("latin-1"))
        doc = IniFile(path).load().document
        assert doc.get_string("Mitarbeiter", "Name") == "Jürgen Müller"
        assert doc.get_string("Mitarbeiter", "Straße") == "Hauptstraße 12"

    def test_explicit_encoding(self, tmp_path: Path):
        path = tmp_path / "cp.ini"
        path.write_bytes("k=é\n".encode("cp1252"))
        ini = IniFile(path, encoding="cp1252").load()
        assert ini.document.get_string_g("k") == "é"
        ini.save()
        assert path.read_bytes() == "k=é\n".encode("cp1252")

    def test_utf8_bom_file(self, tmp_path: Path):
        path = tmp_path / "bom.ini"
        path.write_bytes("\ufeff[s]\nk=ü\n".encode("utf-8"))
        doc = IniFile(path).load().document
        assert doc.get_sections() == [None, "s"]
        assert doc.get_string("s", "k") == "ü"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.ini"
        path.write_bytes(b"")
        ini = IniFile(path).load()
        assert ini.loaded
        assert ini.document.get_sections() == [None]

    def test_debug_logging(self, tmp_path: Path, caplog):
        path = tmp_path / "a.ini"
        path.write_text(EMPLOYEES, encoding="utf-8")
        with caplog.at_level(logging.DEBUG, logger="inidoc"):
            IniFile(path).load()
        assert any(str(path) in record.getMessage() for record in caplog.records)
