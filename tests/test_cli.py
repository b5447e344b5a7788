"""Tests for the magicsniff CLI."""

from __future__ import annotations

import os
import threading

import pytest

from magicsniff.cli import main
from magicsniff.cli._common import EXIT_ERROR, EXIT_MATCH, EXIT_NO_MATCH


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "report.bin"
    data = bytearray(512)
    data[100:104] = b"%PDF"
    path.write_bytes(bytes(data))
    return path


PDF_ARGS = ["--media-type", "application/pdf", "--value", "25504446"]


class TestDetectCommand:
    def test_match(self, pdf_file, capsys):
        rc = main(["detect", str(pdf_file), *PDF_ARGS, "--offset", "0:1024"])
        assert rc == EXIT_MATCH
        assert "application/pdf" in capsys.readouterr().out

    def test_no_match_outside_range(self, pdf_file, capsys):
        rc = main(["detect", str(pdf_file), *PDF_ARGS, "--offset", "0:99"])
        assert rc == EXIT_NO_MATCH
        assert "application/octet-stream" in capsys.readouterr().out

    def test_string_value_with_mask(self, tmp_path, capsys):
        path = tmp_path / "lower.bin"
        path.write_bytes(b"%pdf-1.4")
        rc = main(
            [
                "detect",
                str(path),
                "--media-type",
                "application/pdf",
                "--value",
                "%PDF",
                "--mask",
                r"\xff\xdf\xdf\xdf",
                "--type",
                "string",
            ]
        )
        assert rc == EXIT_MATCH

    def test_missing_file(self, tmp_path, capsys):
        rc = main(["detect", str(tmp_path / "nope.bin"), *PDF_ARGS])
        assert rc == EXIT_ERROR
        assert "no such file" in capsys.readouterr().err

    def test_mask_length_mismatch(self, pdf_file, capsys):
        rc = main(["detect", str(pdf_file), *PDF_ARGS, "--mask", "ff"])
        assert rc == EXIT_ERROR
        assert "4 != 1" in capsys.readouterr().err

    def test_invalid_value(self, pdf_file, capsys):
        rc = main(
            [
                "detect",
                str(pdf_file),
                "--media-type",
                "application/pdf",
                "--value",
                "not-hex",
            ]
        )
        assert rc == EXIT_ERROR
        assert "invalid signature" in capsys.readouterr().err

    def test_missing_required_option(self, pdf_file):
        # tyro reports usage errors with exit status 2
        assert main(["detect", str(pdf_file)]) == EXIT_ERROR == 2

    def test_unopenable_path(self, tmp_path, capsys):
        rc = main(["detect", str(tmp_path), *PDF_ARGS])
        assert rc == EXIT_ERROR
        assert "cannot open" in capsys.readouterr().err

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_reads_from_named_pipe(self, tmp_path, capsys):
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)

        def write():
            with open(fifo, "wb") as w:
                w.write(b"%PDF-1.4\n")

        writer = threading.Thread(target=write)
        writer.start()
        try:
            rc = main(["detect", str(fifo), *PDF_ARGS])
        finally:
            writer.join(timeout=5)
        assert rc == EXIT_MATCH
        assert "application/pdf" in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("content", "expected"),
        [(b"\x00", EXIT_MATCH), (b"\x01", EXIT_NO_MATCH)],
    )
    def test_octet_stream_label(self, tmp_path, content, expected):
        path = tmp_path / "zero.bin"
        path.write_bytes(content)
        rc = main(
            [
                "detect",
                str(path),
                "--media-type",
                "application/octet-stream",
                "--value",
                "00",
            ]
        )
        assert rc == expected


class TestDescribeCommand:
    def test_describe(self, capsys):
        rc = main(["describe", *PDF_ARGS, "--offset", "8:64", "--mask", "ffffffdf"])
        assert rc == EXIT_MATCH
        out = capsys.readouterr().out
        assert "application/pdf" in out
        assert "25504446" in out
        assert "ffffffdf" in out
        assert "[8,64]" in out
        assert "68 bytes" in out

    def test_describe_invalid_offset(self, capsys):
        rc = main(["describe", *PDF_ARGS, "--offset", "9:1"])
        assert rc == EXIT_ERROR
