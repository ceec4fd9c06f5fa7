import pytest

from blogpipe.config import load_config
from blogpipe.errors import ConfigError
from blogpipe.utils import join_url, parse_bool, parse_int


def test_missing_file_is_empty(tmp_path):
    assert load_config(tmp_path / "site.toml") == {}


def test_toml(tmp_path):
    path = tmp_path / "site.toml"
    path.write_text('site_url = "https://example.com"\nbuild_workers = 4\n', encoding="utf-8")

    assert load_config(path) == {"site_url": "https://example.com", "build_workers": 4}


def test_yaml(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("content: posts\nenable_sitemap: false\n", encoding="utf-8")

    assert load_config(path) == {"content": "posts", "enable_sitemap": False}


def test_empty_yaml(tmp_path):
    path = tmp_path / "site.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


def test_json(tmp_path):
    path = tmp_path / "site.json"
    path.write_text('{"output": "dist"}', encoding="utf-8")

    assert load_config(path) == {"output": "dist"}


@pytest.mark.parametrize(
    "name, text",
    [
        ("site.toml", "site_url = "),
        ("site.yaml", "a: [b"),
        ("site.json", "{not json"),
        ("site.json", "[1, 2]"),
    ],
)
def test_invalid_config(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_parse_helpers():
    assert parse_bool("yes") is True
    assert parse_bool("off") is False
    assert parse_int("12", 3) == 12
    assert parse_int("twelve", 3) == 3


def test_join_url():
    assert join_url("https://example.com/", "tags", "a b") == "https://example.com/tags/a%20b"
    assert join_url("https://example.com", "") == "https://example.com"
