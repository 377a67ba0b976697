"""Tests for run configuration loading."""

import json

import pytest

from conftest import write_fasta
from seqstats_pkg.config_manager import Config, ConfigManager, InputConfig, apply_names
from seqstats_pkg.exceptions import ConfigurationError, InputFileNotFoundError
from seqstats_pkg.metrics import MetricField
from seqstats_pkg.report import OutputMode
from seqstats_pkg.utils.formats import CodingType, SequenceFormat


def write_config(path, data):
    path.write_text(json.dumps(data))
    return path


class TestInputConfig:

    def test_from_path(self, temp_dir):
        path = write_fasta(temp_dir / "assembly.fa.gz", [("c1", "ACGT")], compress=True)

        input_config = InputConfig.from_path(path)

        assert input_config.filename == "assembly.fa.gz"
        assert input_config.name == "assembly"
        assert input_config.coding_type == CodingType.GZIP
        assert input_config.detected_format == SequenceFormat.FASTA

    def test_missing_file(self, temp_dir):
        with pytest.raises(InputFileNotFoundError):
            InputConfig.from_path(temp_dir / "missing.fasta")


class TestApplyNames:

    def test_names_are_positional(self, temp_dir):
        first = write_fasta(temp_dir / "a.fasta", [("c1", "ACGT")])
        second = write_fasta(temp_dir / "b.fasta", [("c1", "ACGT")])

        inputs = apply_names([first, second], ["x", "y"])

        assert [i.name for i in inputs] == ["x", "y"]

    def test_name_count_mismatch(self, temp_dir):
        first = write_fasta(temp_dir / "a.fasta", [("c1", "ACGT")])

        with pytest.raises(ConfigurationError, match="one name per file"):
            apply_names([first], ["x", "y"])


class TestConfig:

    @pytest.fixture
    def inputs(self, temp_dir):
        return [InputConfig.from_path(write_fasta(temp_dir / "a.fasta", [("c1", "ACGT")]))]

    def test_requires_inputs(self):
        with pytest.raises(ConfigurationError):
            Config(inputs=[])

    def test_fields_require_parsable_mode(self, inputs):
        with pytest.raises(ConfigurationError, match="parsable"):
            Config(inputs=inputs, output_fields=[MetricField.N50])

    def test_no_header_requires_fields(self, inputs):
        with pytest.raises(ConfigurationError, match="no_header"):
            Config(inputs=inputs, output_mode=OutputMode.PARSABLE, no_header=True)


class TestConfigManager:
    """Test JSON configuration loading."""

    @pytest.fixture
    def fasta(self, temp_dir):
        return write_fasta(temp_dir / "genome.fasta", [("chr1", "ACGTACGT")])

    def test_load_minimal(self, temp_dir, fasta):
        config_path = write_config(temp_dir / "config.json", {"files": ["genome.fasta"]})

        config = ConfigManager.load(config_path)

        assert len(config.inputs) == 1
        assert config.inputs[0].filepath == fasta.resolve()
        assert config.inputs[0].name == "genome"
        assert config.output_mode == OutputMode.TABLE
        assert config.settings.quality_offset == 33

    def test_load_full(self, temp_dir, fasta):
        config_path = write_config(temp_dir / "config.json", {
            "files": [{"filename": "genome.fasta", "name": "ref"}],
            "settings": {"min_size": 100, "genome_size": 5000000},
            "output": {"mode": "parsable", "fields": ["n50", "ng50"], "no_header": True,
                       "per_seq": "per_seq.tsv"},
        })

        config = ConfigManager.load(config_path)

        assert config.inputs[0].name == "ref"
        assert config.settings.min_size == 100
        assert config.settings.genome_size == 5000000
        assert config.output_mode == OutputMode.PARSABLE
        assert config.output_fields == [MetricField.N50, MetricField.NG50]
        assert config.no_header is True
        assert config.per_seq == temp_dir / "per_seq.tsv"

    def test_missing_config_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager.load(temp_dir / "config.json")

    def test_invalid_json(self, temp_dir):
        config_path = temp_dir / "config.json"
        config_path.write_text("{files: ")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigManager.load(config_path)

    def test_unknown_key(self, temp_dir, fasta):
        config_path = write_config(temp_dir / "config.json",
                                   {"files": ["genome.fasta"], "threads": 4})

        with pytest.raises(ConfigurationError, match="threads"):
            ConfigManager.load(config_path)

    def test_unknown_setting(self, temp_dir, fasta):
        config_path = write_config(temp_dir / "config.json",
                                   {"files": ["genome.fasta"], "settings": {"kmer": 21}})

        with pytest.raises(ConfigurationError, match="Unknown setting"):
            ConfigManager.load(config_path)

    def test_unknown_output_field(self, temp_dir, fasta):
        config_path = write_config(temp_dir / "config.json", {
            "files": ["genome.fasta"],
            "output": {"mode": "parsable", "fields": ["n50", "n99"]},
        })

        with pytest.raises(ConfigurationError, match="n99"):
            ConfigManager.load(config_path)

    def test_empty_file_list(self, temp_dir):
        config_path = write_config(temp_dir / "config.json", {"files": []})

        with pytest.raises(ConfigurationError, match="non-empty"):
            ConfigManager.load(config_path)

    def test_path_traversal_blocked(self, temp_dir):
        config_dir = temp_dir / "configs"
        config_dir.mkdir()
        write_fasta(temp_dir / "outside.fasta", [("c1", "ACGT")])
        config_path = write_config(config_dir / "config.json", {"files": ["../outside.fasta"]})

        with pytest.raises(ConfigurationError, match="Path traversal detected"):
            ConfigManager.load(config_path)

    def test_missing_input_file(self, temp_dir):
        config_path = write_config(temp_dir / "config.json", {"files": ["absent.fasta"]})

        with pytest.raises(InputFileNotFoundError):
            ConfigManager.load(config_path)
