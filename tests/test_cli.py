"""Tests for the command-line interface."""

import pytest

from pubtrack.cli import PubTrackCLI, create_parser, run_cli
from pubtrack.console import status_text
from pubtrack.services.status_style import resolve_status_style


def test_parser_style_options():
    args = create_parser().parse_args(["style", "Rejected", "--color", "#123456", "--font-color", "#00B050"])
    assert (args.command, args.status, args.color, args.font_color) == (
        "style",
        "Rejected",
        "#123456",
        "#00B050",
    )


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        create_parser().parse_args([])


def test_show_renders_sheet(settings, make_workbook, sample_papers, capsys):
    make_workbook(sample_papers)
    assert run_cli(["show"]) == 0
    out = capsys.readouterr().out
    assert "Dr. Jane Roe" in out
    assert "Scoliosis" in out


def test_import_then_export(settings, make_workbook, sample_papers, capsys):
    make_workbook(sample_papers)
    assert run_cli(["import"]) == 0
    assert run_cli(["export"]) == 0
    out = capsys.readouterr().out
    assert "Imported" in out
    assert "Exported" in out

    cli = PubTrackCLI(settings)
    assert len(cli.repo.find_all()) == 3


def test_missing_workbook_exits_nonzero(settings, capsys):
    assert run_cli(["show"]) == 1
    assert "Error" in capsys.readouterr().out


def test_style_command(settings, capsys):
    assert run_cli(["style", "Awaiting EIC Decision"]) == 0
    out = capsys.readouterr().out
    assert "pulse-glow" in out


def test_status_text_uses_badge_colors():
    text = status_text("Yet to start", resolve_status_style("Yet to start"))
    assert str(text.style) == "#a0aec0"
    glowing = status_text("EIC Decision", resolve_status_style("EIC Decision"))
    assert str(glowing.style) == "bold #00ff9d"
