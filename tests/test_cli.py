"""Tests for audiolex.cli module.

Tests cover:
- CLI argument parsing
- classify, query, purpose and validate commands
- JSON and table output
- Error handling and exit codes
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from audiolex import cli
from audiolex.cli import create_parser, run_cli
from audiolex.config import EngineSettings

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("AUDIOLEX_MAX_INPUT_LENGTH", "AUDIOLEX_DEBUG", "AUDIOLEX_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path: Path) -> str:
    """Project directory without a config file."""
    return str(tmp_path)


def run_json(project: str, *args: str, capsys: pytest.CaptureFixture[str]) -> dict:
    assert run_cli(["--project", project, "--json", *args]) == 0
    return json.loads(capsys.readouterr().out)


# =============================================================================
# Parser Tests
# =============================================================================


class TestParser:
    """Tests for argument parser."""

    def test_create_parser(self):
        """Test parser creation."""
        parser = create_parser()
        assert parser.prog == "audiolex"

    def test_parser_classify(self):
        parser = create_parser()
        args = parser.parse_args(
            ["classify", "Apply EQ", "--allow", "apply_eq", "troubleshoot", "--expertise", "expert"]
        )

        assert args.command == "classify"
        assert args.text == "Apply EQ"
        assert args.allow == ["apply_eq", "troubleshoot"]
        assert args.expertise == "expert"
        assert args.func is cli.classify_text

    def test_parser_classify_defaults(self):
        args = create_parser().parse_args(["classify", "hello"])
        assert args.allow is None
        assert args.expertise is None
        assert args.json is False
        assert args.project_path == "."

    def test_parser_query(self):
        args = create_parser().parse_args(["query", "What is a gate?", "--expertise", "beginner"])
        assert args.command == "query"
        assert args.func is cli.analyze_query

    def test_parser_purpose(self):
        args = create_parser().parse_args(["purpose", "Please approve"])
        assert args.func is cli.analyze_purpose

    def test_parser_validate(self):
        args = create_parser().parse_args(["--json", "validate"])
        assert args.json is True
        assert args.func is cli.validate_models

    def test_invalid_intent_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["classify", "text", "--allow", "dance"])

    def test_invalid_expertise_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["query", "text", "--expertise", "guru"])


# =============================================================================
# Command Tests
# =============================================================================


class TestCommands:
    """Tests for command output."""

    def test_classify_json(self, project: str, capsys: pytest.CaptureFixture[str]):
        data = run_json(
            project,
            "classify",
            "Start recording the lead vocals with the Neumann U87",
            capsys=capsys,
        )
        assert data["intent"] == "start_recording"
        assert data["context"]["matched_equipment"] == ["neumann"]

    def test_classify_allow(self, project: str, capsys: pytest.CaptureFixture[str]):
        data = run_json(
            project,
            "classify",
            "Start recording the lead vocals",
            "--allow",
            "apply_eq",
            capsys=capsys,
        )
        assert data["intent"] == "get_info"
        assert data["confidence"] == 0.0

    def test_classify_table(self, project: str, capsys: pytest.CaptureFixture[str]):
        assert run_cli(["--project", project, "classify", "Stop recording now"]) == 0
        out = capsys.readouterr().out
        assert "stop_recording" in out

    def test_query_json(self, project: str, capsys: pytest.CaptureFixture[str]):
        data = run_json(
            project,
            "query",
            "Apply EQ to the bass track with a boost at 80Hz",
            "--expertise",
            "professional",
            capsys=capsys,
        )
        assert data["category"] == "technical"
        assert data["expertise"] == "professional"
        assert data["entities"] == [{"text": "80Hz", "type": "parameter", "confidence": 0.95}]

    def test_query_table(self, project: str, capsys: pytest.CaptureFixture[str]):
        assert run_cli(["--project", project, "query", "Live concert on a big stage"]) == 0
        out = capsys.readouterr().out
        assert "live_sound" in out

    def test_query_table_entity_types(self, project: str, capsys: pytest.CaptureFixture[str]):
        """Entity types are printed next to each entity."""
        assert run_cli(["--project", project, "query", "Neumann mic at 80Hz"]) == 0
        out = capsys.readouterr().out
        assert "neumann (brand)" in out
        assert "80Hz (parameter)" in out

    def test_classify_expertise_does_not_change_intent(
        self, project: str, capsys: pytest.CaptureFixture[str]
    ):
        """--expertise is passed as context, which intent scoring does not read."""
        text = "Apply EQ to the bass track with a boost at 80Hz"
        plain = run_json(project, "classify", text, capsys=capsys)
        with_expertise = run_json(project, "classify", text, "--expertise", "expert", capsys=capsys)
        assert plain == with_expertise

    def test_purpose_json(self, project: str, capsys: pytest.CaptureFixture[str]):
        data = run_json(project, "purpose", "Urgent problem, fix today", capsys=capsys)
        assert data["purpose"] == "troubleshooting"
        assert data["urgency"]["time_sensitivity"] == "immediate"

    def test_purpose_table(self, project: str, capsys: pytest.CaptureFixture[str]):
        assert run_cli(["--project", project, "purpose", "Please approve the budget"]) == 0
        assert "decision_making" in capsys.readouterr().out

    def test_validate_json(self, project: str, capsys: pytest.CaptureFixture[str]):
        data = run_json(project, "validate", capsys=capsys)
        assert data["total_examples"] == 5
        assert data["intent_accuracy"] == 1.0
        assert len(data["misses"]) == 6

    def test_validate_table(self, project: str, capsys: pytest.CaptureFixture[str]):
        assert run_cli(["--project", project, "validate"]) == 0
        out = capsys.readouterr().out
        assert "Validation" in out
        assert "Misses" in out

    def test_output_format_from_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        """output_format: json in the config file switches to JSON output."""
        EngineSettings(output_format="json").save(tmp_path)

        assert run_cli(["--project", str(tmp_path), "validate"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["category_accuracy"] == pytest.approx(0.8)

    def test_max_input_length_from_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        EngineSettings(max_input_length=10).save(tmp_path)

        data = run_json(str(tmp_path), "classify", "Start recording the lead vocals", capsys=capsys)
        assert data["intent"] == "get_info"


# =============================================================================
# run_cli Tests
# =============================================================================


class TestRunCli:
    """Tests for run_cli exit codes."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]):
        assert run_cli([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_keyboard_interrupt(self, project: str, monkeypatch: pytest.MonkeyPatch):
        def interrupted(settings=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "create_manager", interrupted)
        assert run_cli(["--project", project, "validate"]) == 130

    def test_unexpected_error(
        self, project: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        def broken(settings=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "create_manager", broken)
        assert run_cli(["--project", project, "validate"]) == 1
        assert "Error: boom" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        config_dir = tmp_path / ".audiolex"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("output_format: xml\n")

        assert run_cli(["--project", str(tmp_path), "validate"]) == 1
        assert "Error:" in capsys.readouterr().out
