import pytest

from str2table.config import load_config, settings_from_section
from str2table.errors import ConfigError, ConflictsError, ErrorLevel, RangeError
from str2table.settings import Axis, Color, ForceType, ParseMode, Settings

CONFIG = """
[base]
separation = "#"
end_line = ";"
show_level = "error"

[main]
input = "data.txt"
seperation = ","
is_auto = false
force_parse.column = [[1, 1, 's'], [3, 2, 'i']]
export_color.line = [[1, 1, 'r'], [2, 4, 'g']]
export_subtable.line = [1, 3]
export_subtable.column = [2]
configuration = [".", "base"]
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "str2table.toml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


def test_load_section(config_file):
    settings = load_config(config_file, "base")
    assert settings.separation == "#"
    assert settings.end_line == ";"
    assert settings.show_level is ErrorLevel.ERROR
    assert settings.input is None


def test_inheritance_and_selectors(config_file):
    settings = load_config(config_file, "main")
    assert settings.input == "data.txt"
    assert settings.separation == ","
    assert settings.end_line == ";"
    assert settings.parse_mode is ParseMode.STRING
    assert settings.force_parse.attributes(Axis.COLUMN) == {
        1: ForceType.STRING, 2: ForceType.INTEGER, 3: ForceType.INTEGER}
    assert settings.colors.attributes(Axis.LINE)[4] is Color.GREEN
    assert settings.subtable.line_indices == [1, 3]
    assert settings.subtable.column_indices == [2]


def test_command_line_wins(config_file):
    settings = load_config(config_file, "main").merge(Settings(separation="|"))
    assert settings.separation == "|"
    assert settings.input == "data.txt"


def test_inherit_from_other_file(tmp_path):
    (tmp_path / "base.toml").write_text('[shared]\nseparation = "\\t"\n', encoding="utf-8")
    (tmp_path / "child.toml").write_text('[child]\nconfiguration = ["base.toml", "shared"]\n',
                                         encoding="utf-8")
    assert load_config(tmp_path / "child.toml", "child").separation == "\t"


def test_cycle(tmp_path):
    path = tmp_path / "loop.toml"
    path.write_text('[a]\nconfiguration = [".", "b"]\n[b]\nconfiguration = [".", "a"]\n',
                    encoding="utf-8")
    with pytest.raises(ConfigError) as info:
        load_config(path, "a")
    assert "cycle" in info.value.reason


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(ConfigError) as info:
        load_config(tmp_path / "nope.toml", "main")
    assert info.value.level is ErrorLevel.FATAL


def test_missing_section(config_file):
    with pytest.raises(ConfigError) as info:
        load_config(config_file, "other")
    assert info.value.level is ErrorLevel.ERROR


def test_bad_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[main\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, "main")


def test_wrong_value_type():
    with pytest.raises(ConfigError):
        settings_from_section({"is_auto": "yes"})
    with pytest.raises(ConfigError):
        settings_from_section({"export_color": {"line": [[1, 2]]}})


def test_entries_use_selector_grammar():
    with pytest.raises(ConflictsError):
        settings_from_section({"force_parse": {"line": [[1, 1, "s"]], "column": [[1, 1, "s"]]}})
    with pytest.raises(RangeError):
        settings_from_section({"export_subtable": {"line": [-1]}})
