"""
Tests for the experiment runner CLI.
"""

import os
import subprocess
import sys
from pathlib import Path

import yaml

# Add scripts directory to path
scripts_dir = Path(__file__).parent.parent.parent.parent / "scripts"
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

from common.config_utils import ProctorConfig
from proctor.run_proctor import build_config, main, parse_args


SMALL_RUN = ["--num-models", "2", "--num-trials", "2", "--num-points", "40"]


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.config is None
        assert args.num_models is None
        assert args.count_self_tie is False
        assert args.num_points == 500

    def test_overrides(self):
        args = parse_args(["-c", "x.yaml", "--seed", "4", "--count-self-tie"])

        assert args.config == "x.yaml"
        assert args.seed == 4
        assert args.count_self_tie is True


class TestBuildConfig:
    """Test config merging."""

    def test_without_file(self):
        config = build_config(parse_args(["--num-models", "4"]))

        assert config.num_models == 4
        assert config.num_trials == ProctorConfig().num_trials
        assert config.count_self_tie is False

    def test_file_and_overrides(self, tmp_path):
        path = tmp_path / "proctor.yaml"
        path.write_text(yaml.safe_dump({"num_models": 6, "num_trials": 12}))

        config = build_config(parse_args(["-c", str(path), "--num-trials", "3", "--count-self-tie"]))

        assert config.num_models == 6
        assert config.num_trials == 3
        assert config.count_self_tie is True


class TestMain:
    """Test the main entry point."""

    def test_small_run(self, capsys):
        assert main(SMALL_RUN) == 0

        out = capsys.readouterr().out
        assert "[overview]" in out
        assert "[precision-recall]" in out
        assert "[classifier stats]" in out
        assert "[timing]" in out
        assert "[detector timing]" in out

    def test_invalid_config(self, capsys):
        assert main(["--num-models", "0"]) == 1

        assert "Invalid configuration" in capsys.readouterr().out

    def test_invalid_num_points(self):
        assert main(["--num-points", "0"]) == 1

    def test_missing_config_file(self, tmp_path):
        assert main(["-c", str(tmp_path / "missing.yaml")]) == 1

    def test_run_from_file(self, tmp_path, capsys):
        path = tmp_path / "proctor.yaml"
        path.write_text(yaml.safe_dump({"proctor": {"num_models": 2, "num_trials": 4, "seed": 5}}))

        assert main(["-c", str(path), "--num-points", "40"]) == 0
        assert "of 4 correct" in capsys.readouterr().out


class TestScriptInvocation:
    """Run the script by path, as documented in its help epilog."""

    def test_run_by_path_with_scripts_on_pythonpath(self, tmp_path):
        """Test the script when scripts/ is already importable, as after an editable install."""
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(scripts_dir), env.get("PYTHONPATH")) if p
        )

        completed = subprocess.run(
            [sys.executable, str(scripts_dir / "proctor" / "run_proctor.py"), *SMALL_RUN],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
            timeout=120,
        )

        assert completed.returncode == 0, completed.stderr
        assert "[overview]" in completed.stdout
