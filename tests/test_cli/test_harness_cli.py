"""Tests for the codec-tester command line interface."""

import argparse
import json
import logging
import runpy

import pytest

from codec_tester.cli.main import (
    MAX_EXIT_STATUS,
    create_parser,
    exit_status,
    main,
    parse_maxbits,
    parse_seed,
)
from codec_tester.core.fuzz import DEFAULT_FUZZ_SEED
from codec_tester.utils.logger import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """main() binds the log handler to the captured stderr; rebind afterwards."""
    yield
    configure_logging(log_level="WARNING")


class TestArgumentParsing:
    """Test argument parser configuration."""

    def test_defaults(self):
        args = create_parser().parse_args(["a.bin"])
        assert args.files == ["a.bin"]
        assert args.maxbits == 0
        assert not args.fuzz
        assert not args.exhaustive
        assert not args.quiet
        assert args.codec is None
        assert args.seed is None

    def test_all_flags(self):
        args = create_parser().parse_args(
            ["-b", "12", "-f", "--seed", "0x10", "-e", "-q", "-c", "zlib", "x", "y"]
        )
        assert args.maxbits == 12
        assert args.fuzz and args.exhaustive and args.quiet
        assert args.seed == 16
        assert args.codec == "zlib"
        assert args.files == ["x", "y"]

    @pytest.mark.parametrize(
        "flag,bits",
        [pytest.param(f"-{index}", index + 8, id=f"-{index}") for index in range(1, 9)],
    )
    def test_size_shortcuts(self, flag, bits):
        assert create_parser().parse_args([flag, "f"]).maxbits == bits

    def test_cycle_shortcut(self):
        assert create_parser().parse_args(["-0", "f"]).maxbits == 0

    def test_size_options_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["-3", "-b", "12", "f"])

    def test_log_file_is_a_path(self, tmp_path):
        args = create_parser().parse_args(["--log-file", str(tmp_path / "r.log"), "f"])
        assert args.log_file == tmp_path / "r.log"

    @pytest.mark.parametrize("value", ["8", "17", "abc"])
    def test_bad_maxbits_exits(self, value):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["-b", value, "f"])

    def test_parse_maxbits(self):
        assert parse_maxbits("0") == 0
        assert parse_maxbits("16") == 16
        with pytest.raises(argparse.ArgumentTypeError):
            parse_maxbits("5")

    @pytest.mark.parametrize(
        "text,value",
        [("0", 0), ("12345", 12345), ("0x3141592653589793", DEFAULT_FUZZ_SEED)],
    )
    def test_parse_seed(self, text, value):
        assert parse_seed(text) == value

    @pytest.mark.parametrize("text", ["-1", "0x10000000000000000", "pi"])
    def test_parse_seed_rejects(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_seed(text)

    def test_exit_status_capped(self):
        assert exit_status(0) == 0
        assert exit_status(7) == 7
        assert exit_status(256) == MAX_EXIT_STATUS
        assert exit_status(100_000) == MAX_EXIT_STATUS


class TestMain:
    """Test main() end to end."""

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 0
        assert "usage: codec-tester" in capsys.readouterr().out

    def test_clean_run(self, capsys, write_file):
        path = write_file("aaaa.txt", b"AAAAAAAAAA")
        assert main(["-b", "9", str(path)]) == 0
        out = capsys.readouterr().out
        assert f"file {path}, maxbits =  9: 10 bytes -->" in out
        assert "0 errors detected in 1 files (0 skipped)" in out

    def test_full_sweep(self, capsys, write_file, sample_bytes):
        path = write_file("sample.bin", sample_bytes)
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        for bits in range(9, 17):
            assert f"maxbits = {bits:2d}:" in out
        assert "8 tests" in out

    def test_quiet(self, capsys, write_file):
        path = write_file("q.bin", b"quiet please " * 10)
        assert main(["-q", str(path)]) == 0
        out = capsys.readouterr().out
        assert "maxbits =" not in out
        assert "0 errors detected" in out

    def test_skipped_file_is_not_an_error(self, capsys, tmp_path):
        assert main([str(tmp_path / "missing.bin")]) == 0
        out = capsys.readouterr().out
        assert "can't open file" in out
        assert "0 errors detected in 0 files (1 skipped)" in out

    def test_exit_status_is_error_count(self, capsys, write_file):
        path = write_file("data.bin", b"some data " * 10)
        code = main(["-c", "conftest:FailingCompressCodec", str(path)])
        assert code == 8
        assert "8 errors detected" in capsys.readouterr().out

    def test_unknown_codec(self, capsys, write_file):
        path = write_file("data.bin", b"x")
        assert main(["-c", "nonexistent", str(path)]) == 1
        assert "Unknown codec 'nonexistent'" in capsys.readouterr().out

    def test_list_codecs(self, capsys):
        assert main(["--list-codecs"]) == 0
        assert "zlib" in capsys.readouterr().out.split()

    def test_fuzz_run_completes(self, capsys, write_file, sample_bytes):
        path = write_file("fuzz.bin", sample_bytes)
        code = main(["-f", "-e", "-b", "16", "-q", str(path)])
        assert 0 <= code <= MAX_EXIT_STATUS
        assert "errors detected in 1 files" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "Codec Tester v1.0.0" in capsys.readouterr().out

    def test_module_entry_point(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.argv", ["codec-tester"])
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("codec_tester", run_name="__main__")
        assert exc_info.value.code == 0
        assert "usage:" in capsys.readouterr().out

    def test_size_shortcut_run(self, capsys, write_file):
        path = write_file("s.bin", b"shortcut " * 8)
        assert main(["-4", str(path)]) == 0
        out = capsys.readouterr().out
        assert "maxbits = 12:" in out
        assert "1 tests" in out

    def test_log_file_receives_records(self, capsys, write_file, tmp_path):
        path = write_file("log.bin", b"logged " * 8)
        log_file = tmp_path / "logs" / "run.log"
        code = main(
            ["-v", "--log-format", "json", "--log-file", str(log_file), "-q", str(path)]
        )
        assert code == 0
        for handler in logging.root.handlers:
            handler.flush()

        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert "run_started" in events
