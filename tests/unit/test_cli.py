"""Unit tests for CLI commands."""

import json
import logging

import pytest
from typer.testing import CliRunner

from nim_profiles.cli.main import app
from nim_profiles.cli.utils import build_model_spec, console, load_model_spec_file, parse_gpu_option
from nim_profiles.models.spec import GPUSpec
from nim_profiles.utils.config import (
    LoggingConfig,
    MatchConfig,
    NimProfilesConfig,
    OutputConfig,
    set_config,
)
from nim_profiles.utils.errors import ValidationError

runner = CliRunner()


class TestMainCLI:
    """Tests for main CLI app."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "match" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "nim-profiles version" in result.stdout

    def test_color_from_config(self):
        set_config(NimProfilesConfig(output=OutputConfig(color=False)))
        runner.invoke(app, ["version"])
        assert console.no_color is True

        set_config(NimProfilesConfig())
        runner.invoke(app, ["version"])
        assert console.no_color is False

    def test_verbose_from_config(self):
        set_config(NimProfilesConfig(output=OutputConfig(verbose=True)))
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert logging.getLogger("nim_profiles").level == logging.DEBUG

    def test_log_level_from_config(self):
        set_config(NimProfilesConfig(logging=LoggingConfig(level="ERROR")))
        runner.invoke(app, ["version"])
        assert logging.getLogger("nim_profiles").level == logging.ERROR

    def test_unknown_log_level(self):
        set_config(NimProfilesConfig(logging=LoggingConfig(level="chatty")))
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.stdout


class TestListCommand:
    """Tests for the list command."""

    def test_list_terminal(self, sample_manifest_file):
        result = runner.invoke(app, ["list", "--manifest", str(sample_manifest_file)])
        assert result.exit_code == 0
        assert "Profiles (5)" in result.stdout

    def test_list_json(self, sample_manifest_file, tmp_path):
        output = tmp_path / "profiles.json"
        result = runner.invoke(
            app,
            ["list", "-m", str(sample_manifest_file), "--format", "json", "--output", str(output)],
        )
        assert result.exit_code == 0

        data = json.loads(output.read_text())
        assert list(data["profiles"]) == sorted(data["profiles"])
        assert data["profiles"]["onnx-a10g"]["tags"]["backend"] == "tensorrt"

    def test_list_default_format_from_config(self, sample_manifest_file, tmp_path):
        set_config(NimProfilesConfig(output=OutputConfig(default_format="json")))
        output = tmp_path / "profiles.json"
        result = runner.invoke(app, ["list", "-m", str(sample_manifest_file), "-o", str(output)])
        assert result.exit_code == 0
        assert len(json.loads(output.read_text())["profiles"]) == 5

    def test_list_missing_manifest(self, tmp_path):
        result = runner.invoke(app, ["list", "-m", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "MANIFEST_NOT_FOUND" in result.stdout

    def test_list_malformed_manifest(self, tmp_path):
        manifest = tmp_path / "bad.yaml"
        manifest.write_text("p1: [unclosed")
        result = runner.invoke(app, ["list", "-m", str(manifest)])
        assert result.exit_code == 1
        assert "MANIFEST_PARSE_ERROR" in result.stdout


class TestShowCommand:
    """Tests for the show command."""

    def test_show(self, sample_manifest_file):
        result = runner.invoke(app, ["show", "-m", str(sample_manifest_file), "vllm-fp16-tp1"])
        assert result.exit_code == 0
        assert "meta/llama3-8b-instruct" in result.stdout
        assert "llm_engine" in result.stdout

    def test_show_unknown(self, sample_manifest_file):
        result = runner.invoke(app, ["show", "-m", str(sample_manifest_file), "missing"])
        assert result.exit_code == 0
        assert "not found" in result.stdout


class TestMatchCommand:
    """Tests for the match command."""

    def _match_json(self, tmp_path, *args: str) -> tuple[int, dict]:
        output = tmp_path / "match.json"
        result = runner.invoke(app, ["match", *args, "--format", "json", "--output", str(output)])
        data = json.loads(output.read_text()) if output.exists() else {}
        return result.exit_code, data

    def test_match_flags(self, sample_manifest_file, tmp_path):
        exit_code, data = self._match_json(
            tmp_path,
            "-m",
            str(sample_manifest_file),
            "--precision",
            "fp16",
            "--gpu",
            "H100:2330",
        )
        assert exit_code == 0
        assert data["profile_ids"] == ["trt-h100-fp16-tp1"]
        assert data["total_profiles"] == 5
        assert data["model_spec"]["gpus"] == [{"product": "H100", "ids": ["2330"]}]

    def test_match_discovered(self, sample_manifest_file, tmp_path):
        exit_code, data = self._match_json(
            tmp_path,
            "-m",
            str(sample_manifest_file),
            "--engine",
            "tensorrt_llm",
            "-d",
            "NVIDIA-A100-SXM4-80GB",
        )
        assert exit_code == 0
        assert data["profile_ids"] == ["onnx-a10g"]
        assert data["discovered_gpus"] == ["NVIDIA-A100-SXM4-80GB"]

    def test_match_lora(self, sample_manifest_file, tmp_path):
        exit_code, data = self._match_json(tmp_path, "-m", str(sample_manifest_file), "--lora")
        assert exit_code == 0
        assert data["profile_ids"] == ["trt-a100-fp16-tp1-lora"]

    def test_match_sorted(self, sample_manifest_file, tmp_path):
        exit_code, data = self._match_json(tmp_path, "-m", str(sample_manifest_file))
        assert exit_code == 0
        assert data["profile_ids"] == sorted(data["profile_ids"])
        assert len(data["profile_ids"]) == 4

    def test_match_unsorted_config(self, sample_manifest_file, tmp_path):
        set_config(NimProfilesConfig(match=MatchConfig(sort_results=False)))
        exit_code, data = self._match_json(tmp_path, "-m", str(sample_manifest_file))
        assert exit_code == 0
        assert len(data["profile_ids"]) == 4

    def test_match_spec_file(self, sample_manifest_file, sample_nimcache_file, tmp_path):
        exit_code, data = self._match_json(
            tmp_path,
            "-m",
            str(sample_manifest_file),
            "--spec",
            str(sample_nimcache_file),
        )
        assert exit_code == 0
        assert data["profile_ids"] == ["trt-h100-fp16-tp1"]

    def test_match_flag_overrides_spec_file(self, sample_manifest_file, sample_nimcache_file, tmp_path):
        exit_code, data = self._match_json(
            tmp_path,
            "-m",
            str(sample_manifest_file),
            "-s",
            str(sample_nimcache_file),
            "--tp",
            "2",
            "--qos-profile",
            "throughput",
        )
        assert exit_code == 0
        assert data["profile_ids"] == ["trt-h100-fp8-tp2"]

    def test_match_none_exit_code(self, sample_manifest_file):
        result = runner.invoke(app, ["match", "-m", str(sample_manifest_file), "--precision", "int4"])
        assert result.exit_code == 1
        assert "No matching profiles" in result.stdout

    def test_match_terminal(self, sample_manifest_file):
        result = runner.invoke(app, ["match", "-m", str(sample_manifest_file), "--engine", "vllm"])
        assert result.exit_code == 0
        assert "Profile Match" in result.stdout
        assert "Matching profiles (1 of 5)" in result.stdout

    def test_match_bad_spec_file(self, sample_manifest_file, tmp_path):
        spec = tmp_path / "spec.yaml"
        spec.write_text("- not\n- a mapping\n")
        result = runner.invoke(app, ["match", "-m", str(sample_manifest_file), "-s", str(spec)])
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.stdout


class TestCLIUtils:
    """Tests for CLI helpers."""

    def test_parse_gpu_option(self):
        assert parse_gpu_option("H100") == GPUSpec(product="H100")
        assert parse_gpu_option("H100:2330, 2331") == GPUSpec(product="H100", ids=["2330", "2331"])

    def test_load_bare_model_spec(self, tmp_path):
        spec = tmp_path / "spec.yaml"
        spec.write_text("precision: fp8\nlora: true\n")
        assert load_model_spec_file(spec) == {"precision": "fp8", "lora": True}

    def test_unquoted_gpu_ids_in_spec_file(self, tmp_path):
        spec = tmp_path / "spec.yaml"
        spec.write_text("tensorParallelism: 2\ngpus:\n  - product: H100\n    ids: [2330]\n")
        model_spec = build_model_spec(load_model_spec_file(spec), {})
        assert model_spec.tensor_parallelism == "2"
        assert model_spec.gpus == [GPUSpec(product="H100", ids=["2330"])]

    def test_load_nimcache(self, sample_nimcache_file):
        fields = load_model_spec_file(sample_nimcache_file)
        assert fields["engine"] == "tensorrt_llm"
        assert fields["tensorParallelism"] == "1"

    def test_load_missing_spec(self, tmp_path):
        with pytest.raises(ValidationError):
            load_model_spec_file(tmp_path / "missing.yaml")

    def test_build_model_spec_ignores_unset_flags(self):
        spec = build_model_spec({"precision": "fp16"}, {"precision": None, "engine": "vllm"})
        assert spec.precision == "fp16"
        assert spec.engine == "vllm"

    def test_build_model_spec_invalid(self):
        with pytest.raises(ValidationError):
            build_model_spec({"gpus": "H100"}, {})
