"""Tests for the seqstats command line."""

import json

import pytest

from conftest import write_fasta, write_fastq
from seqstats_pkg.cli import main


@pytest.fixture
def fasta(temp_dir):
    return write_fasta(temp_dir / "assembly.fasta", [
        ("a", "ACGTNNGGCC"),
        ("b", "AAAA"),
        ("c", "GG"),
    ])


@pytest.fixture
def fastq(temp_dir):
    return write_fastq(temp_dir / "reads.fastq.gz", [
        ("r1", "ACGT", "IIII"),
        ("r2", "GGCCAA", "!!!!!!"),
    ], compress=True)


class TestOutputModes:

    def test_table_is_default(self, fasta, capsys):
        assert main(["-f", str(fasta)]) == 0

        out = capsys.readouterr().out
        assert "Cumul. size" in out
        assert "assembly" in out

    def test_csv(self, fasta, fastq, capsys):
        assert main(["-f", str(fasta), "-f", str(fastq), "--csv"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "filename,assembly,reads"
        assert "cumul,16,10" in lines
        assert "mean_quality,0,20" in lines

    def test_several_files_after_one_flag(self, fasta, fastq, capsys):
        assert main(["-f", str(fasta), str(fastq), "-c"]) == 0
        assert capsys.readouterr().out.splitlines()[0] == "filename,assembly,reads"

    def test_parsable_subset(self, fasta, capsys):
        code = main(["-f", str(fasta), "-p", "--output-format", "n50,l50,aun"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            "filename,n50,l50,aun",
            "assembly,10,1,7",
        ]

    def test_parsable_no_header(self, fasta, capsys):
        code = main(["-f", str(fasta), "-p", "--output-format", "cumul", "--no-header"])

        assert code == 0
        assert capsys.readouterr().out == "assembly,16\n"

    def test_csv_and_parsable_conflict(self, fasta):
        with pytest.raises(SystemExit):
            main(["-f", str(fasta), "-c", "-p"])


class TestOptions:

    def test_rename(self, fasta, fastq, capsys):
        code = main(["-f", str(fasta), "-f", str(fastq), "-c", "-r", "asm,run1"])

        assert code == 0
        assert capsys.readouterr().out.splitlines()[0] == "filename,asm,run1"

    def test_rename_count_mismatch(self, fasta, capsys):
        assert main(["-f", str(fasta), "-r", "a,b"]) == 1
        assert "one name per file" in capsys.readouterr().err

    def test_min_size_and_genome_size(self, fasta, capsys):
        code = main(["-f", str(fasta), "-m", "3", "-g", "20", "-p",
                     "--output-format", "number,ng50,lg50"])

        assert code == 0
        assert capsys.readouterr().out.splitlines()[1] == "assembly,2,10,1"

    def test_phred64(self, temp_dir, capsys):
        path = write_fastq(temp_dir / "old.fq", [("r1", "ACGT", "hhhh")])

        assert main(["-f", str(path), "-q", "64", "-p", "--output-format", "mean_quality"]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "old,40"

    def test_per_seq(self, fastq, temp_dir, capsys):
        per_seq = temp_dir / "per_seq.tsv"

        assert main(["-f", str(fastq), "--per-seq", str(per_seq), "-c"]) == 0
        assert per_seq.read_text().splitlines() == [
            "r1\t4\t50.00\t40.00",
            "r2\t6\t66.67\t0.00",
        ]

    def test_config_file(self, fasta, temp_dir, capsys):
        config_path = temp_dir / "config.json"
        config_path.write_text(json.dumps({
            "files": [{"filename": fasta.name, "name": "cfg"}],
            "output": {"mode": "parsable", "fields": ["cumul"]},
        }))

        assert main(["--config", str(config_path)]) == 0
        assert capsys.readouterr().out.splitlines() == ["filename,cumul", "cfg,16"]

    @pytest.mark.parametrize("extra", [
        ["-m", "100"],
        ["-g", "5000"],
        ["-q", "64"],
        ["-c"],
        ["-p", "--output-format", "n50"],
        ["-r", "other"],
    ])
    def test_config_file_rejects_other_options(self, fasta, temp_dir, capsys, extra):
        config_path = temp_dir / "config.json"
        config_path.write_text(json.dumps({"files": [fasta.name]}))

        assert main(["--config", str(config_path)] + extra) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "--config cannot be combined with" in captured.err


class TestErrors:
    """Errors are reported on stderr before any report is printed."""

    @pytest.mark.parametrize("fields", ["n50,foo", "bar", "n50,,l50", ""])
    def test_invalid_output_format(self, fasta, capsys, fields):
        assert main(["-f", str(fasta), "-p", "--output-format", fields]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "✗ Error" in captured.err

    def test_output_format_requires_parsable(self, fasta, capsys):
        assert main(["-f", str(fasta), "--output-format", "n50"]) == 1
        assert "requires --parsable" in capsys.readouterr().err

    def test_no_header_requires_output_format(self, fasta, capsys):
        assert main(["-f", str(fasta), "-p", "--no-header"]) == 1

    def test_no_input(self, capsys):
        assert main([]) == 1
        assert "No input file" in capsys.readouterr().err

    def test_missing_file(self, temp_dir, capsys):
        assert main(["-f", str(temp_dir / "missing.fa")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_all_sequences_filtered(self, fasta, capsys):
        assert main(["-f", str(fasta), "-m", "1000", "-c"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No sequence of at least 1000 bases" in captured.err

    def test_malformed_file_aborts_whole_run(self, fasta, temp_dir, capsys):
        bad = temp_dir / "bad.fastq"
        bad.write_text("@r1\nACGT\n+\nII\n")

        assert main(["-f", str(fasta), "-f", str(bad), "-c"]) == 1
        assert capsys.readouterr().out == ""
