import os
import stat
import pytest
from renamatic import comparator
from renamatic import processor
from renamatic.errors import ParseError, SerializeError, TraversalError

INVALID_SOURCE = """package main

import "std"

func main() {
	std.Addr( // missing closing parenthesis
"""


@pytest.mark.parametrize("path, expected", [
    ("test.gno", True),
    ("test.gnoA", True),
    ("test.gnoXXXXXX", True),
    ("test.go", False),
    ("testfile", False),
    ("/path/to/test.gno", True),
    ("/path/to/test.gnoA", True),
])
def test_should_process(path, expected):
    file_processor = processor.GnoFileProcessor({})
    assert file_processor.should_process(path) == expected


def test_should_process_with_other_extension():
    file_processor = processor.GnoFileProcessor({}, extension_prefix=".go")
    assert file_processor.should_process("main.go")
    assert not file_processor.should_process("main.gno")


def test_process_dir(tmp_path, write_file, name_map, sample_source, sample_expected):
    sample_file = write_file("sample.gno", sample_source)

    changed = processor.process_dir(str(tmp_path), name_map)

    assert changed == [str(sample_file)]
    assert sample_file.read_text() == sample_expected
    assert comparator.compare_source(sample_file.read_text(), sample_expected)


def test_ignores_non_gno_files(tmp_path, write_file, name_map):
    text_file = write_file("sample.txt", "This is not a gno file. std.Addr()")
    go_file = write_file("sample.go", "package main\n\nfunc main() {\n\tstd.Addr()\n}\n")

    assert processor.process_dir(str(tmp_path), name_map) == []
    assert text_file.read_text() == "This is not a gno file. std.Addr()"
    assert go_file.read_text() == "package main\n\nfunc main() {\n\tstd.Addr()\n}\n"


def test_nested_directories(tmp_path, write_file, name_map):
    nested_file = write_file("nested/deeper/nested.gno",
                             "package main\n\nimport \"std\"\n\nfunc main() {\n\tstd.Addr()\n}")

    processor.process_dir(str(tmp_path), name_map)

    assert nested_file.read_text() == "package main\n\nimport \"std\"\n\nfunc main() {\n\tstd.Address()\n}"


def test_lexical_order(tmp_path, write_file, name_map):
    source = "package main\n\nfunc main() {\n\tstd.Addr()\n}\n"
    write_file("c.gno", source)
    write_file("a/x.gno", source)
    write_file("b.gno", source)

    changed = processor.process_dir(str(tmp_path), name_map)

    assert changed == [os.path.join(str(tmp_path), "a", "x.gno"),
                       os.path.join(str(tmp_path), "b.gno"),
                       os.path.join(str(tmp_path), "c.gno")]


def test_extended_extension_processed(tmp_path, write_file, name_map):
    source_file = write_file("test.gnoA", "package main\n\nfunc main() {\n\tstd.Addr()\n}\n")
    processor.process_dir(str(tmp_path), name_map)
    assert source_file.read_text() == "package main\n\nfunc main() {\n\tstd.Address()\n}\n"


def test_other_packages_left_alone(tmp_path, write_file, name_map):
    source = "package main\n\nimport \"custom\"\n\nfunc main() {\n\tcustom.Addr()\n}\n"
    source_file = write_file("sample.gno", source)

    assert processor.process_dir(str(tmp_path), name_map) == []
    assert source_file.read_text() == source


def test_invalid_syntax(tmp_path, write_file, name_map):
    invalid_file = write_file("invalid.gno", INVALID_SOURCE)

    with pytest.raises(TraversalError) as info:
        processor.process_dir(str(tmp_path), name_map)

    assert info.value.path == str(invalid_file)
    assert isinstance(info.value.cause, ParseError)
    assert info.value.__cause__ is info.value.cause
    assert info.value.cause.path == str(invalid_file)
    assert str(info.value).startswith("Failed to process file " + str(invalid_file))
    assert invalid_file.read_text() == INVALID_SOURCE


def test_stops_at_first_failure(tmp_path, write_file, name_map):
    source = "package main\n\nfunc main() {\n\tstd.Addr()\n}\n"
    first = write_file("a.gno", source)
    write_file("b.gno", INVALID_SOURCE)
    last = write_file("c.gno", source)

    with pytest.raises(TraversalError):
        processor.process_dir(str(tmp_path), name_map)

    assert first.read_text() == "package main\n\nfunc main() {\n\tstd.Address()\n}\n"
    assert last.read_text() == source


def test_invalid_utf8(tmp_path, write_file, name_map):
    write_file("binary.gno", b"package main\n\n// \xff\xfe\n")

    with pytest.raises(TraversalError) as info:
        processor.process_dir(str(tmp_path), name_map)

    assert isinstance(info.value.cause, ParseError)
    assert "not valid UTF-8" in str(info.value)


def test_invalid_new_name(tmp_path, write_file):
    source = "package main\n\nfunc main() {\n\tstd.Addr()\n}\n"
    source_file = write_file("sample.gno", source)

    with pytest.raises(TraversalError) as info:
        processor.process_dir(str(tmp_path), {"Addr": "not valid"})

    assert isinstance(info.value.cause, SerializeError)
    assert source_file.read_text() == source


@pytest.mark.parametrize("mode", [0o640, 0o755, 0o600])
def test_permissions_preserved(tmp_path, write_file, name_map, sample_source, mode):
    sample_file = write_file("sample.gno", sample_source, mode)

    processor.process_dir(str(tmp_path), name_map)

    assert stat.S_IMODE(os.stat(sample_file).st_mode) == mode


def test_dry_run(tmp_path, write_file, name_map, sample_source, capsys):
    sample_file = write_file("sample.gno", sample_source)

    changed = processor.process_dir(str(tmp_path), name_map, dry_run=True)

    assert changed == [str(sample_file)]
    assert sample_file.read_text() == sample_source
    assert "Would rewrite " + str(sample_file) + " (3 renamed)" in capsys.readouterr().out


def test_missing_root(tmp_path, name_map):
    missing = str(tmp_path / "missing")
    with pytest.raises(TraversalError) as info:
        processor.process_dir(missing, name_map)
    assert info.value.path == missing
    assert isinstance(info.value.cause, FileNotFoundError)


def test_single_file_root(tmp_path, write_file, name_map, sample_source, sample_expected):
    sample_file = write_file("sample.gno", sample_source)
    assert processor.process_dir(str(sample_file), name_map) == [str(sample_file)]
    assert sample_file.read_text() == sample_expected


def test_process_file_reports_unchanged(write_file, name_map):
    source_file = write_file("sample.gno", "package main\n\nfunc main() {}\n")
    file_processor = processor.GnoFileProcessor(name_map)
    assert not file_processor.process_file(str(source_file))


def test_parse_reports_position():
    with pytest.raises(ParseError) as info:
        processor.parse(b"package main\n\nfunc main() {\n\tx := \n}\n", "broken.gno")
    assert info.value.path == "broken.gno"
    assert info.value.line == 5
    assert str(info.value).startswith("broken.gno:5:1: ")


def test_byte_order_mark_preserved(tmp_path, write_file, name_map):
    source = "\ufeffpackage p\n\nimport \"std\"\n\nfunc f() { std.Addr() }\n"
    source_file = write_file("bom.gno", source)

    assert processor.process_dir(str(tmp_path), name_map) == [str(source_file)]
    assert source_file.read_bytes() == \
        "\ufeffpackage p\n\nimport \"std\"\n\nfunc f() { std.Address() }\n".encode("utf-8")


def test_too_deeply_nested(tmp_path, write_file, name_map):
    source = "package p\n\nvar x = " + "(" * 5000 + "1" + ")" * 5000 + "\n"
    nested_file = write_file("nested.gno", source)

    with pytest.raises(TraversalError) as info:
        processor.process_dir(str(tmp_path), name_map)

    assert info.value.path == str(nested_file)
    assert isinstance(info.value.cause, ParseError)
    assert info.value.cause.path == str(nested_file)
    assert "nested too deeply" in str(info.value)
