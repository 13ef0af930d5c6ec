#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli_integration.py
"""Integration tests for the mailtree command line.

Each test drives ``mailtree.cli.main`` with an argument list and checks the
exit code and captured output.
"""

import json
from pathlib import Path

import pytest

from mailtree import __version__
from mailtree.cli import main
from mailtree.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAILTREE_CONFIG", raising=False)


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.mark.integration
@pytest.mark.cli
class TestRenderCommand:
    """``mailtree render``."""

    def test_html_to_stdout(self, template_file: Path, payload_file: Path, capsys: pytest.CaptureFixture) -> None:
        code = main(["render", str(template_file), "--payload", str(payload_file), "--no-config"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert out.startswith("<!DOCTYPE html")
        assert "Welcome, Alice</h1>" in out
        assert out.endswith("\n")

    def test_text_to_stdout(self, template_file: Path, payload_file: Path, capsys: pytest.CaptureFixture) -> None:
        code = main(["render", str(template_file), "-p", str(payload_file), "-f", "text", "--no-config"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert out.startswith("Welcome, Alice\n\n")
        assert "- Widget\n- Gadget\n" in out

    def test_output_file(self, template_file: Path, payload_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "out" / "welcome.html"
        code = main(["render", str(template_file), "-p", str(payload_file), "--fragment", "-o", str(target), "--no-config"])
        assert code == EXIT_SUCCESS
        html = target.read_text(encoding="utf-8")
        assert "<html" not in html
        assert "Welcome, Alice</h1>" in html

    def test_yaml_payload_and_theme(self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        payload = tmp_path / "payload.yaml"
        payload.write_text("name: Bea\nhas_order: false\n", encoding="utf-8")
        theme = tmp_path / "theme.yml"
        theme.write_text("button:\n  backgroundColor: '#123456'\n", encoding="utf-8")
        code = main(["render", str(template_file), "-p", str(payload), "-t", str(theme), "--fragment", "--no-config"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "Welcome, Bea</h1>" in out
        assert "background-color:#123456" in out
        assert "Your order" not in out

    def test_render_flags(self, template_file: Path, capsys: pytest.CaptureFixture) -> None:
        code = main(["render", str(template_file), "-f", "text", "--no-replace", "--no-link-urls", "--no-config"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert out.startswith("Welcome, {{name,fallback=friend}}\n\n")
        assert "https://example.com/unsub" not in out

    def test_preview_text_and_title(self, template_file: Path, capsys: pytest.CaptureFixture) -> None:
        code = main(["render", str(template_file), "--preview-text", "Hello!", "--title", "Welcome", "--no-config"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "<title>Welcome</title>" in out
        assert ">Hello!<div>" in out

    def test_config_file(self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        config = tmp_path / "mailtree.toml"
        config.write_text(
            'placeholder_policy = "bracketed"\n\n[text]\ninclude_link_urls = false\n\n'
            '[theme.button]\nbackgroundColor = "#abcdef"\n',
            encoding="utf-8",
        )
        code = main(["render", str(template_file), "-f", "text", "--config", str(config)])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "Open dashboard\n" in out
        assert "https://example.com/unsub" not in out

    def test_flags_override_config(self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        config = write_json(tmp_path / "config.json", {"html": {"language": "fr"}})
        code = main(["render", str(template_file), "--config", str(config), "--language", "de"])
        assert code == EXIT_SUCCESS
        assert '<html lang="de"' in capsys.readouterr().out

    def test_config_from_environment(
        self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = write_json(tmp_path / "env.json", {"html": {"language": "nl"}})
        monkeypatch.setenv("MAILTREE_CONFIG", str(config))
        assert main(["render", str(template_file)]) == EXIT_SUCCESS
        assert '<html lang="nl"' in capsys.readouterr().out


@pytest.mark.integration
@pytest.mark.cli
class TestExitCodes:
    """Errors map to documented exit codes."""

    def test_missing_template(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["render", str(tmp_path / "missing.json"), "--no-config"]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_missing_payload(self, template_file: Path, tmp_path: Path) -> None:
        code = main(["render", str(template_file), "-p", str(tmp_path / "nope.json"), "--no-config"])
        assert code == EXIT_FILE_ERROR

    def test_invalid_template_json(self, tmp_path: Path) -> None:
        template = tmp_path / "broken.json"
        template.write_text('{"type": "doc", ', encoding="utf-8")
        assert main(["render", str(template), "--no-config"]) == EXIT_PARSING_ERROR

    def test_invalid_payload_json(self, template_file: Path, tmp_path: Path) -> None:
        payload = tmp_path / "payload.json"
        payload.write_text("{nope", encoding="utf-8")
        assert main(["render", str(template_file), "-p", str(payload), "--no-config"]) == EXIT_PARSING_ERROR

    def test_payload_not_an_object(self, template_file: Path, tmp_path: Path) -> None:
        payload = write_json(tmp_path / "payload.json", [1, 2, 3])
        assert main(["render", str(template_file), "-p", str(payload), "--no-config"]) == EXIT_VALIDATION_ERROR

    def test_invalid_option_value(self, template_file: Path) -> None:
        assert main(["render", str(template_file), "--max-repeat", "-1", "--no-config"]) == EXIT_VALIDATION_ERROR

    def test_missing_config_file(self, template_file: Path, tmp_path: Path) -> None:
        code = main(["render", str(template_file), "--config", str(tmp_path / "nope.toml")])
        assert code == EXIT_VALIDATION_ERROR

    def test_missing_required_variable(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        template = write_json(
            tmp_path / "t.json",
            {
                "type": "doc",
                "content": [
                    {"type": "paragraph", "content": [{"type": "variable", "attrs": {"id": "token", "required": True}}]}
                ],
            },
        )
        assert main(["render", str(template), "--no-config"]) == EXIT_RENDERING_ERROR
        assert "token" in capsys.readouterr().err
        assert main(["render", str(template), "--lenient-required", "--no-config"]) == EXIT_SUCCESS

    def test_unknown_node_type(self, tmp_path: Path) -> None:
        template = write_json(tmp_path / "t.json", {"type": "doc", "content": [{"type": "carousel"}]})
        assert main(["render", str(template), "--no-config"]) == EXIT_RENDERING_ERROR

    def test_no_command(self, capsys: pytest.CaptureFixture) -> None:
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "usage:" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


@pytest.mark.integration
@pytest.mark.cli
class TestInspectionCommands:
    """``mailtree validate`` and ``mailtree variables``."""

    def test_validate(self, template_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["validate", str(template_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == f"{template_file}: OK (22 nodes)"

    def test_validate_invariant_violation(self, tmp_path: Path) -> None:
        template = write_json(
            tmp_path / "t.json",
            {"type": "doc", "content": [{"type": "columns", "content": [{"type": "paragraph"}]}]},
        )
        assert main(["validate", str(template)]) == EXIT_RENDERING_ERROR

    def test_variables_json(self, template_file: Path, payload_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["variables", str(template_file), "--payload", str(payload_file), "--json"]) == EXIT_SUCCESS
        report = json.loads(capsys.readouterr().out)
        provided = {row["name"]: row["provided"] for row in report["variables"]}
        assert provided == {
            "name": True,
            "has_order": True,
            "items": True,
            "label": False,
            "dashboard_url": True,
        }

    def test_variables_json_without_payload(self, template_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["variables", str(template_file), "--json"]) == EXIT_SUCCESS
        report = json.loads(capsys.readouterr().out)
        assert all(row["provided"] is None for row in report["variables"])

    def test_variables_table(self, template_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["variables", str(template_file)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "dashboard_url" in out
        assert "has_order" in out

    def test_no_variables(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        template = write_json(
            tmp_path / "t.json", {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}]}
        )
        assert main(["variables", str(template)]) == EXIT_SUCCESS
        assert "No variables referenced." in capsys.readouterr().out
