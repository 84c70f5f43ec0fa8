"""Tests for fastaidx.io module."""

import os

import pytest

from fastaidx.errors import FastaFormatError, FastaIOError
from fastaidx.io import read_text, write_text


class TestReadText:
    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes("chr1\n".encode("utf-8"))
        assert read_text(path) == "chr1\n"

    def test_undecodable_bytes(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"seq\xff1\t12\t11\t8\t9\n")
        with pytest.raises(FastaFormatError):
            read_text(path)

    def test_latin1(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"seq\xff1\n")
        assert read_text(path, encoding="latin-1") == "seq\xff1\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FastaIOError):
            read_text(tmp_path / "missing.txt")


class TestWriteText:
    def test_replaces_existing_file(self, tmp_path):
        path = tmp_path / "out.fai"
        path.write_text("old\n")
        write_text("new\n", path)
        assert path.read_text() == "new\n"
        assert os.listdir(tmp_path) == ["out.fai"]

    def test_encoding_failure_keeps_existing_file(self, tmp_path):
        path = tmp_path / "out.fai"
        path.write_text("old\n")
        with pytest.raises(FastaFormatError):
            write_text("chr一\t1\t2\t3\t4\n", path, encoding="latin-1")
        assert path.read_text() == "old\n"
        assert os.listdir(tmp_path) == ["out.fai"]

    def test_failed_rename_keeps_existing_file(self, tmp_path, monkeypatch):
        path = tmp_path / "out.fai"
        path.write_text("old\n")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(FastaIOError):
            write_text("new\n", path)
        assert path.read_text() == "old\n"
        assert os.listdir(tmp_path) == ["out.fai"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FastaIOError):
            write_text("x\n", tmp_path / "no" / "dir" / "out.fai")
