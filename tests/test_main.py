import pytest
from renamatic import main


def run_main(args):
    with pytest.raises(SystemExit) as info:
        main.main(args)
    return info.value.code


def test_rewrites_directory(tmp_path, write_file, mapping_path, sample_source, sample_expected, capsys):
    sample_file = write_file("sample.gno", sample_source)

    assert run_main(["--mapping", mapping_path, "--dir", str(tmp_path)]) == 0

    assert sample_file.read_text() == sample_expected
    out = capsys.readouterr().out
    assert "Loading mapping from " + mapping_path in out
    assert "Rewrote " + str(sample_file) in out
    assert "1 file(s) changed" in out
    assert out.rstrip().endswith("Done")


def test_dry_run(tmp_path, write_file, mapping_path, sample_source, capsys):
    sample_file = write_file("sample.gno", sample_source)

    assert run_main(["--mapping", mapping_path, "--dir", str(tmp_path), "--dry-run"]) == 0

    assert sample_file.read_text() == sample_source
    assert "1 file(s) would be changed" in capsys.readouterr().out


def test_qualifier_and_extension(tmp_path, write_file, mapping_path):
    source_file = write_file("main.go", "package main\n\nfunc main() {\n\tstd.Addr()\n\tchain.Addr()\n}\n")

    assert run_main(["--mapping", mapping_path, "--dir", str(tmp_path), "--qualifier", "chain",
                     "--extension", ".go"]) == 0

    assert source_file.read_text() == "package main\n\nfunc main() {\n\tstd.Addr()\n\tchain.Address()\n}\n"


def test_bad_mapping(tmp_path, write_file, capsys):
    mapping_file = write_file("mapping.yml", "invalid_yaml: [unbalanced")

    assert run_main(["--mapping", str(mapping_file), "--dir", str(tmp_path)]) == 1

    assert "Failed to load mapping file" in capsys.readouterr().err


def test_bad_source(tmp_path, write_file, mapping_path, capsys):
    invalid_file = write_file("invalid.gno", "package main\n\nfunc main() {\n\tstd.Addr(\n")

    assert run_main(["--mapping", mapping_path, "--dir", str(tmp_path)]) == 1

    assert "Failed to process file " + str(invalid_file) in capsys.readouterr().err


def test_missing_directory(tmp_path, mapping_path, capsys):
    assert run_main(["--mapping", mapping_path, "--dir", str(tmp_path / "missing")]) == 1
    assert "Failed to process file" in capsys.readouterr().err


def test_unknown_argument():
    assert run_main(["--no-such-option"]) == 2
