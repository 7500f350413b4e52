import pytest

from voidcli.config import Config, KeybindingsConfig

FULL_YAML = """\
theme: light
font:
  name: Fira Code
  size: 12
  line_height: 1.5
terminal:
  shell: /bin/zsh
  scrollback_lines: 500
  cursor_blink: false
keybindings: {}
performance:
  gpu_acceleration: false
  vsync: true
"""


def test_default_values(monkeypatch):
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    config = Config.default()
    assert config.theme == "dark"
    assert config.font.name == "JetBrains Mono"
    assert config.font.size == 14.0
    assert config.font.line_height == pytest.approx(1.2)
    assert config.terminal.shell == "/usr/bin/fish"
    assert config.terminal.scrollback_lines == 10000
    assert config.terminal.cursor_blink is True
    assert config.performance.gpu_acceleration and config.performance.vsync


def test_default_shell_fallback(monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    assert Config.default().terminal.shell == "/bin/bash"


def test_from_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(FULL_YAML)
    config = Config.from_file(path)
    assert config.theme == "light"
    assert config.font.name == "Fira Code"
    assert config.font.size == 12.0
    assert config.font.line_height == 1.5
    assert config.terminal.shell == "/bin/zsh"
    assert config.terminal.scrollback_lines == 500
    assert config.terminal.cursor_blink is False
    assert config.keybindings == KeybindingsConfig()
    assert config.performance.gpu_acceleration is False
    assert config.performance.vsync is True


def test_missing_section_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(FULL_YAML.replace("keybindings: {}\n", ""))
    with pytest.raises(ValueError, match="keybindings"):
        Config.from_file(path)


def test_wrong_type_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(FULL_YAML.replace("scrollback_lines: 500", "scrollback_lines: lots"))
    with pytest.raises(ValueError, match="scrollback_lines"):
        Config.from_file(path)


def test_non_mapping_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        Config.from_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_file(tmp_path / "absent.yaml")