"""Tests for fastaidx.reader module."""

import io

import pytest

from fastaidx.builder import build_index
from fastaidx.errors import FastaIOError, FastaRangeError, FastaStateError
from fastaidx.reader import IndexedReader, SequentialReader, iter_records


def _readers(path):
    stream = open(path, "rb")
    table = build_index(stream)
    return stream, IndexedReader(stream, table), SequentialReader(stream)


class TestIterRecords:
    def test_yields_names_and_sequences(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            records = list(iter_records(stream))
        assert records == [("seq1", "ACGTACGTACGT"), ("seq2", "TTTT")]

    def test_restartable(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            first = next(iter_records(stream))
            again = list(iter_records(stream))
        assert first == ("seq1", "ACGTACGTACGT")
        assert len(again) == 2

    def test_crlf(self, crlf_fasta):
        with open(crlf_fasta, "rb") as stream:
            assert list(iter_records(stream)) == [("a", "ACGTAC"), ("b", "GG")]


class TestIndexedReader:
    def test_scenario_a(self, scenario_fasta):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            assert reader.get_length(0) == 12
            assert reader.get_length(1) == 4
            assert reader.get_base(0, 8) == "A"
            assert reader.get_sequence(1, 0, 3) == "TTTT"

    def test_scenario_b(self, scenario_fasta):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            assert reader.get_sequence(0, 2, 5) == "GTAC"

    def test_span_across_line_break(self, scenario_fasta):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            assert reader.get_sequence(0, 6, 9) == "GTAC"
            assert reader.get_sequence(0, 0, 11) == "ACGTACGTACGT"

    def test_span_across_crlf(self, crlf_fasta):
        stream, reader, _ = _readers(crlf_fasta)
        with stream:
            assert reader.get_sequence(0, 2, 5) == "GTAC"
            assert reader.get_base(0, 4) == "A"
            assert reader.get_sequence(1, 0, 1) == "GG"

    def test_offset_law(self, multi_fasta):
        raw = multi_fasta.read_bytes()
        stream, reader, _ = _readers(multi_fasta)
        with stream:
            for ref_id, entry in enumerate(reader.table):
                L, B, O = entry.line_length, entry.byte_length, entry.offset
                for p in range(entry.length):
                    expected = raw[O + (p // L) * B + (p % L)]
                    assert reader.get_base(ref_id, p) == chr(expected)

    def test_position_equal_to_length(self, scenario_fasta):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            assert reader.get_base(1, 4) == ""
            assert reader.get_sequence(0, 10, 12) == "GT"
            assert reader.get_sequence(0, 12, 12) == ""

    @pytest.mark.parametrize(
        "ref_id, start, stop",
        [(-1, 0, 1), (2, 0, 1), (0, 3, 2), (0, 0, 13), (0, -1, 2)],
    )
    def test_bounds_rejection_keeps_cursor(self, scenario_fasta, ref_id, start, stop):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            stream.seek(7)
            with pytest.raises(FastaRangeError):
                reader.get_sequence(ref_id, start, stop)
            assert stream.tell() == 7

    @pytest.mark.parametrize("ref_id, position", [(-1, 0), (2, 0), (0, 13), (1, -1)])
    def test_base_bounds_rejection_keeps_cursor(self, scenario_fasta, ref_id, position):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            stream.seek(3)
            with pytest.raises(FastaRangeError):
                reader.get_base(ref_id, position)
            assert stream.tell() == 3

    def test_length_bounds(self, scenario_fasta):
        stream, reader, _ = _readers(scenario_fasta)
        with stream:
            with pytest.raises(FastaRangeError):
                reader.get_length(2)
            with pytest.raises(FastaRangeError):
                reader.get_length(-1)

    def test_stale_index_detected(self, tmp_path):
        path = tmp_path / "ragged.fa"
        path.write_bytes(b">a\nACGTACGT\nAC\n>b\nACG\nTTT\nGG\n")
        stream, reader, _ = _readers(path)
        with stream:
            with pytest.raises(FastaIOError):
                reader.get_sequence(1, 0, 7)

    def test_ragged_wrapping_uses_first_line_geometry(self, tmp_path):
        path = tmp_path / "ragged.fa"
        path.write_bytes(b">a\nACG\nACGTA\n")
        stream, reader, fallback = _readers(path)
        with stream:
            assert reader.get_length(0) == 8
            # offsets assume every line holds 3 bases
            assert reader.get_base(0, 6) == "A"
            assert fallback.get_base(0, 6) == "T"


class TestSequentialReader:
    def test_scenario(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            reader = SequentialReader(stream)
            assert reader.get_base(0, 8) == "A"
            assert reader.get_sequence(1, 0, 3) == "TTTT"
            assert reader.get_sequence(0, 2, 5) == "GTAC"

    def test_length_unsupported(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            with pytest.raises(FastaStateError, match="no index"):
                SequentialReader(stream).get_length(0)

    def test_ref_id_past_end(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            with pytest.raises(FastaRangeError):
                SequentialReader(stream).get_base(2, 0)

    def test_position_past_end(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            reader = SequentialReader(stream)
            assert reader.get_base(1, 4) == ""
            with pytest.raises(FastaRangeError):
                reader.get_base(1, 5)
            with pytest.raises(FastaRangeError):
                reader.get_sequence(1, 0, 5)

    def test_invalid_span_rejected_before_walk(self, scenario_fasta):
        with open(scenario_fasta, "rb") as stream:
            reader = SequentialReader(stream)
            stream.seek(9)
            with pytest.raises(FastaRangeError):
                reader.get_sequence(0, 4, 2)
            with pytest.raises(FastaRangeError):
                reader.get_base(-1, 0)
            assert stream.tell() == 9

    def test_find(self, multi_fasta):
        with open(multi_fasta, "rb") as stream:
            reader = SequentialReader(stream)
            assert reader.find("chr3") == 2
            assert reader.find("chr9") is None


class TestPathEquivalence:
    def test_all_spans_match(self, multi_fasta):
        stream, indexed, sequential = _readers(multi_fasta)
        with stream:
            for ref_id, entry in enumerate(indexed.table):
                for start in range(entry.length):
                    for stop in range(start, entry.length):
                        assert indexed.get_sequence(ref_id, start, stop) == sequential.get_sequence(
                            ref_id, start, stop
                        )

    def test_bases_match(self, crlf_fasta):
        stream, indexed, sequential = _readers(crlf_fasta)
        with stream:
            for ref_id, entry in enumerate(indexed.table):
                for p in range(entry.length + 1):
                    assert indexed.get_base(ref_id, p) == sequential.get_base(ref_id, p)

    def test_sequences_from_memory_stream(self):
        stream = io.BytesIO(b">x\nAAC\nCGG\nT\n>y\nTTA\n")
        indexed = IndexedReader(stream, build_index(stream))
        sequential = SequentialReader(stream)
        assert indexed.get_sequence(0, 1, 6) == sequential.get_sequence(0, 1, 6) == "ACCGGT"
