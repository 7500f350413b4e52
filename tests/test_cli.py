import pytest

from voidcli.cli import main

VALID_CONFIG = """\
theme: dark
font:
  name: Mono
  size: 12
  line_height: 1.0
terminal:
  shell: /bin/sh
  scrollback_lines: 100
  cursor_blink: false
keybindings: {}
performance:
  gpu_acceleration: false
  vsync: false
"""


def test_runs_with_default_config():
    assert main([]) == 0


def test_runs_with_config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(VALID_CONFIG, encoding="utf-8")
    assert main([str(path)]) == 0


def test_missing_config_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "absent.yaml")]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_incomplete_config_file_fails(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("theme: dark\n", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "font" in capsys.readouterr().err


def test_too_many_arguments_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["one.yaml", "two.yaml"])
    assert info.value.code == 2