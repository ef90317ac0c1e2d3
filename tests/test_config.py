"""Tests for configuration validation."""

import pytest

from notelint.core.config import Config, _split_list, _to_bool, validate_config


def test_defaults_are_valid(config):
    assert config.validate() == []
    validate_config(config)


def test_split_list_and_bool():
    assert _split_list(" .md, .markdown ,,") == [".md", ".markdown"]
    assert _split_list("") == []
    assert _to_bool("Yes")
    assert not _to_bool("0")


def test_markdown_extensions_are_lowercased(config):
    config.MARKDOWN_EXTENSIONS = [".MD"]
    assert config.markdown_extensions == [".md"]


@pytest.mark.parametrize(
    "attribute, value",
    [
        ("MARKDOWN_EXTENSIONS", ["md"]),
        ("TOC_MIN_LEVEL", 4),
        ("QUESTION_MIN_LEVEL", 7),
        ("LOG_LEVEL", "LOUD"),
        ("DEFAULT_SEARCH_LIMIT", 0),
        ("TITLE_WEIGHT", 0.9),
    ],
)
def test_invalid_values(config, attribute, value):
    setattr(config, attribute, value)
    assert config.validate()


def test_validate_config_raises(config):
    config.TITLE_WEIGHT = 0.5
    config.CONTENT_WEIGHT = 0.2

    with pytest.raises(ValueError, match="TITLE_WEIGHT"):
        validate_config(config)


def test_print_config(config, capsys):
    config.print_config()
    out = capsys.readouterr().out
    assert "현재 설정:" in out
    assert "비활성화 규칙: 없음" in out


def test_class_is_instantiable_without_env():
    assert isinstance(Config().index_file_name, str)
