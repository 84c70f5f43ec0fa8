"""Tests for fastaidx.config module."""

from pathlib import Path

import pytest

from fastaidx.config import FastaConfig, load_config

ENV_VARS = ("FASTAIDX_HEADER_MARKER", "FASTAIDX_INDEX_SUFFIX")


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch restores the variables loaded from .env files
    for name in ENV_VARS:
        monkeypatch.setenv(name, "unused")
        monkeypatch.delenv(name)
    return monkeypatch


class TestFastaConfig:
    def test_defaults(self):
        config = FastaConfig()
        assert config.header_marker == ">"
        assert config.index_suffix == ".fai"
        assert config.marker_byte == b">"

    def test_index_path_for(self):
        assert FastaConfig().index_path_for("data/genome.fa") == Path("data/genome.fa.fai")


class TestLoadConfig:
    def test_defaults(self, clean_env, tmp_path):
        config = load_config(env_path=tmp_path / "missing.env")
        assert config == FastaConfig()

    def test_environment(self, clean_env, tmp_path):
        clean_env.setenv("FASTAIDX_HEADER_MARKER", "@")
        clean_env.setenv("FASTAIDX_INDEX_SUFFIX", ".idx")
        config = load_config(env_path=tmp_path / "missing.env")
        assert config.header_marker == "@"
        assert config.index_suffix == ".idx"

    def test_explicit_overrides_environment(self, clean_env, tmp_path):
        clean_env.setenv("FASTAIDX_INDEX_SUFFIX", ".idx")
        config = load_config(env_path=tmp_path / "missing.env", index_suffix=".fidx")
        assert config.index_suffix == ".fidx"

    def test_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FASTAIDX_INDEX_SUFFIX=.dotenv\n", encoding="utf-8")
        config = load_config(env_path=env_file)
        assert config.index_suffix == ".dotenv"

    @pytest.mark.parametrize("marker", ["", ">>", "é"])
    def test_invalid_marker(self, clean_env, tmp_path, marker):
        clean_env.setenv("FASTAIDX_HEADER_MARKER", marker)
        with pytest.raises(ValueError):
            load_config(env_path=tmp_path / "missing.env")
