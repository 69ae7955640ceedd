"""Tests for settings and runner options."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rsync_runner.config.settings import InvocationSettings, RunnerOptions
from rsync_runner.errors import ConfigurationError

REQUIRED = ["D:\\My Music", "C:\\cwRsync\\rsync.exe", "-arv --delete-before", "/cygdrive/d/My Music", "//nas/Music/"]


def test_from_args_given_five_arguments_then_no_log_reconciliation():
    settings = InvocationSettings.from_args(REQUIRED)

    assert settings.sync_from_path == "D:\\My Music"
    assert settings.tool_executable_path == "C:\\cwRsync\\rsync.exe"
    assert settings.tool_flags == "-arv --delete-before"
    assert settings.from_path == "/cygdrive/d/My Music"
    assert settings.to_path == "//nas/Music/"
    assert settings.tool_log_path is None
    assert settings.clean_log_path is None
    assert settings.reconcile_logs is False


def test_from_args_given_seven_arguments_then_log_reconciliation():
    settings = InvocationSettings.from_args(REQUIRED + ["rsync.log", "clean.txt"])

    assert settings.tool_log_path == "rsync.log"
    assert settings.clean_log_path == "clean.txt"
    assert settings.reconcile_logs is True


@pytest.mark.parametrize("args", [REQUIRED[:4], REQUIRED + ["rsync.log"], REQUIRED + ["a", "b", "c"]])
def test_from_args_given_bad_argument_count_then_raises(args):
    with pytest.raises(ConfigurationError):
        InvocationSettings.from_args(args)


def test_from_args_given_blank_required_value_then_raises():
    args = list(REQUIRED)
    args[0] = "  "

    with pytest.raises(ConfigurationError, match="sync_from_path"):
        InvocationSettings.from_args(args)


def test_settings_are_immutable():
    settings = InvocationSettings.from_args(REQUIRED)

    with pytest.raises(ValidationError):
        settings.to_path = "/elsewhere"


def test_settings_given_one_log_path_then_rejected():
    with pytest.raises(ValidationError):
        InvocationSettings(
            sync_from_path="a", tool_executable_path="b", tool_flags="", from_path="c", to_path="d",
            tool_log_path="rsync.log",
        )


def test_describe_lists_every_argument_in_order():
    described = InvocationSettings.from_args(REQUIRED).describe()

    assert list(described.values()) == REQUIRED + [None, None]


def test_runner_options_defaults():
    options = RunnerOptions()

    assert options.threshold_kb == 4096
    assert options.log_settle_seconds == 3.0
    assert options.deletion_marker == "deleting"
    assert options.excluded_suffixes == [".ini"]
    assert options.excluded_names == ["Thumbs.db"]


def test_runner_options_yaml_round_trip(tmp_path: Path):
    path = tmp_path / "config" / "runner.yaml"
    RunnerOptions(threshold_kb=100, deletion_marker="Deleting", pause_on_error=False).to_yaml(path)

    loaded = RunnerOptions.from_yaml(path)

    assert loaded.threshold_kb == 100
    assert loaded.deletion_marker == "deleting"
    assert loaded.pause_on_error is False


def test_runner_options_from_yaml_given_missing_file_then_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        RunnerOptions.from_yaml(tmp_path / "missing.yaml")


def test_runner_options_from_yaml_given_invalid_value_then_raises_configuration_error(tmp_path: Path):
    path = tmp_path / "runner.yaml"
    path.write_text("threshold_kb: -1\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="threshold_kb"):
        RunnerOptions.from_yaml(path)


def test_runner_options_from_yaml_given_list_then_raises_configuration_error(tmp_path: Path):
    path = tmp_path / "runner.yaml"
    path.write_text("- threshold_kb\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        RunnerOptions.from_yaml(path)


def test_runner_options_from_yaml_given_empty_file_then_defaults(tmp_path: Path):
    path = tmp_path / "runner.yaml"
    path.write_text("", encoding="utf-8")

    assert RunnerOptions.from_yaml(path) == RunnerOptions()
