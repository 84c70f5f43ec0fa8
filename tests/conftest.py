"""Shared fixtures for fastaidx tests."""

import pytest

SCENARIO = b">seq1 desc\nACGTACGT\nACGT\n>seq2\nTTTT\n"

MULTI = (
    b">chr1 first chromosome\n"
    b"ACGTACGTAC\n"
    b"GGGCCCAAAT\n"
    b"TTA\n"
    b">chr2\n"
    b"CCCCCGGGGG\n"
    b">chr3 short\n"
    b"NACGT\n"
    b">chr4\n"
    b"AAAAACCCCC\n"
    b"GGGGGTTTTT\n"
)


@pytest.fixture
def scenario_fasta(tmp_path):
    path = tmp_path / "scenario.fa"
    path.write_bytes(SCENARIO)
    return path


@pytest.fixture
def multi_fasta(tmp_path):
    path = tmp_path / "multi.fa"
    path.write_bytes(MULTI)
    return path


@pytest.fixture
def crlf_fasta(tmp_path):
    path = tmp_path / "crlf.fa"
    path.write_bytes(b">a\r\nACGT\r\nAC\r\n>b\r\nGG\r\n")
    return path
