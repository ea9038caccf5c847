"""Tests for the classifier evaluation CLI."""
from unittest.mock import patch

import pytest

import main as cli


@pytest.fixture
def datasets(fixtures_dir):
    return str(fixtures_dir / "train.txt"), str(fixtures_dir / "test.txt")


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.parse_args(["train.txt", "test.txt"])
        assert args.train == "train.txt"
        assert args.test == "test.txt"
        assert args.k == 3
        assert args.kernel == "auto"
        assert args.config is None
        assert not args.batch
        assert not args.no_progress

    def test_options(self):
        args = cli.parse_args(
            ["a.txt", "b.txt", "-k", "7", "--kernel", "f32x4", "--no-progress", "-v"]
        )
        assert args.k == 7
        assert args.kernel == "f32x4"
        assert args.no_progress
        assert args.verbose

    def test_long_knearest(self):
        assert cli.parse_args(["a", "b", "--knearest", "2"]).k == 2

    def test_unknown_kernel_rejected(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["a.txt", "b.txt", "--kernel", "f32x16"])


class TestMain:
    """Tests for main."""

    def test_prints_accuracy(self, datasets, capsys):
        train, test = datasets
        status = cli.main([train, test, "--kernel", "scalar", "--no-progress"])

        assert status == 0
        assert "Accuracy: 100.0" in capsys.readouterr().out

    def test_k_option_is_used(self, datasets):
        train, test = datasets
        with patch.object(cli, "evaluate_single") as mock_evaluate:
            cli.main([train, test, "-k", "5", "--kernel", "unrolled"])

        config = mock_evaluate.call_args.args[0]
        assert config.k == 5
        assert config.kernel == "unrolled"
        assert config.show_progress is True

    def test_config_file(self, fixtures_dir, monkeypatch, capsys):
        monkeypatch.chdir(fixtures_dir.parent.parent)
        status = cli.main(["-c", str(fixtures_dir / "configuration_test_end_to_end.toml")])

        assert status == 0
        assert "Accuracy: 100.0" in capsys.readouterr().out

    def test_batch(self, datasets, tmp_path, capsys):
        train, test = datasets
        config_path = tmp_path / "batch.toml"
        config_path.write_text(
            f"""
[batch.defaults]
train = "{train}"
test = "{test}"
kernel = "scalar"
show_progress = false

[[batch.evaluations]]
k = 1

[[batch.evaluations]]
k = 3
""",
            encoding="utf-8",
        )

        status = cli.main(["-c", str(config_path), "--batch"])

        assert status == 0
        assert capsys.readouterr().out.count("Accuracy: 100.0") == 2

    def test_missing_dataset(self, fixtures_dir):
        status = cli.main(
            [str(fixtures_dir / "missing.txt"), str(fixtures_dir / "test.txt"), "--no-progress"]
        )
        assert status == 1

    def test_malformed_dataset(self, fixtures_dir):
        status = cli.main(
            [str(fixtures_dir / "malformed.txt"), str(fixtures_dir / "test.txt"), "--no-progress"]
        )
        assert status == 1

    def test_inconsistent_feature_lengths(self, fixtures_dir, tmp_path):
        test = tmp_path / "test.txt"
        test.write_text("0 0.0 0.0 0.0\n", encoding="utf-8")
        status = cli.main(
            [str(fixtures_dir / "train.txt"), str(test), "--kernel", "scalar", "--no-progress"]
        )
        assert status == 1

    def test_test_line_without_features(self, fixtures_dir, tmp_path):
        test = tmp_path / "test.txt"
        test.write_text("0 0.1 0.2\n0\n", encoding="utf-8")
        status = cli.main(
            [str(fixtures_dir / "train.txt"), str(test), "--kernel", "scalar", "--no-progress"]
        )
        assert status == 1

    def test_empty_test_file(self, fixtures_dir, tmp_path):
        test = tmp_path / "test.txt"
        test.write_text("", encoding="utf-8")
        status = cli.main(
            [str(fixtures_dir / "train.txt"), str(test), "--kernel", "scalar", "--no-progress"]
        )
        assert status == 1

    def test_empty_train_file(self, fixtures_dir, tmp_path):
        train = tmp_path / "train.txt"
        train.write_text("", encoding="utf-8")
        status = cli.main(
            [str(train), str(fixtures_dir / "test.txt"), "--kernel", "scalar", "--no-progress"]
        )
        assert status == 1

    def test_requires_datasets(self):
        with pytest.raises(ValueError, match="Either --config or both TRAIN and TEST"):
            cli.main(["train.txt"])

    def test_batch_requires_config(self):
        with pytest.raises(ValueError, match="--batch requires --config"):
            cli.main(["--batch"])

    def test_empty_batch(self, tmp_path):
        config_path = tmp_path / "batch.toml"
        config_path.write_text("[batch]\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Empty batch configuration"):
            cli.main(["-c", str(config_path), "--batch"])
