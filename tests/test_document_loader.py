"""Tests for document_loader and dictionary_loader — reading source files."""

from pathlib import Path

import pytest

from dictcascade.loaders.dictionary_loader import load_dictionary
from dictcascade.loaders.document_loader import format_for_path, load_document, parse_document
from dictcascade.util.errors import ConfigError, DictionaryError, DictionaryIOError, ParseError


class TestFormatSniffing:
    @pytest.mark.parametrize("name, fmt", [
        ("en.json", "json"),
        ("EN.JSON", "json"),
        ("ja.toml", "toml"),
        ("de.yaml", "yaml"),
        ("fr.yml", "yaml"),
        ("README", "json"),
        ("notes.txt", "json"),
        ("archive.json.bak", "json"),
    ])
    def test_format_for_path(self, name, fmt):
        assert format_for_path(name) == fmt


class TestParseDocument:
    def test_json(self):
        assert parse_document('{"a": [1, "b"]}') == {"a": [1, "b"]}

    def test_toml(self):
        assert parse_document('a = 1\n[b]\nc = "d"\n', "toml") == {"a": 1, "b": {"c": "d"}}

    def test_yaml(self):
        assert parse_document("a:\n  b: c\n", "yaml") == {"a": {"b": "c"}}

    def test_utf8_bytes(self):
        doc = parse_document('{"name": "日本語"}'.encode("utf-8"))
        assert doc == {"name": "日本語"}

    @pytest.mark.parametrize("text, fmt", [
        ('{"name": "en", "map": {"a": "b"}}', "json"),
        ('name = "en"\n[map]\na = "b"\n', "toml"),
    ])
    def test_utf8_bom_is_skipped(self, text, fmt):
        doc = parse_document(b"\xef\xbb\xbf" + text.encode("utf-8"), fmt)
        assert doc == {"name": "en", "map": {"a": "b"}}

    def test_deep_nesting_is_a_parse_error(self):
        with pytest.raises(ParseError):
            parse_document("[" * 100000 + "]" * 100000)

    def test_invalid_utf8(self):
        with pytest.raises(ParseError):
            parse_document(b'{"name": "\xff"}')

    @pytest.mark.parametrize("text, fmt", [
        ("{", "json"),
        ("name = ", "toml"),
        ("a: [b", "yaml"),
    ])
    def test_malformed(self, text, fmt):
        with pytest.raises(ParseError):
            parse_document(text, fmt)

    def test_unknown_format(self):
        with pytest.raises(ConfigError):
            parse_document("{}", "xml")


class TestLoadDocument:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DictionaryIOError) as info:
            load_document(tmp_path / "nope.json")
        assert isinstance(info.value, OSError)
        assert isinstance(info.value, DictionaryError)
        assert "nope.json" in str(info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(DictionaryIOError):
            load_document(tmp_path)

    def test_forced_format(self, tmp_path):
        f = tmp_path / "en.txt"
        f.write_text("name: en\nmap: {a: b}\n")
        assert load_document(f, "yaml") == {"name": "en", "map": {"a": "b"}}

    def test_parse_error_carries_path(self, tmp_path):
        f = tmp_path / "en.toml"
        f.write_text("not = = toml")
        with pytest.raises(ParseError) as info:
            load_document(f)
        assert info.value.path == f


class TestLoadDictionary:
    def test_load_json(self, tmp_path):
        f = tmp_path / "en.json"
        f.write_text('{"name": "en", "map": {"menu": {"quit": "Quit"}}}', encoding="utf-8")
        d = load_dictionary(f)
        assert d.name == "en"
        assert d.translate("menu.quit") == "Quit"

    def test_load_toml_with_delimiter(self, tmp_path):
        f = tmp_path / "ja.toml"
        f.write_text('name = "ja"\n[map.menu]\nquit = "終了"\n', encoding="utf-8")
        d = load_dictionary(f, "/")
        assert d.translate("menu/quit") == "終了"

    def test_toml_non_string_values_dropped(self, tmp_path):
        f = tmp_path / "en.toml"
        f.write_text(
            'name = "en"\n[map]\nok = "yes"\ncount = 3\nwhen = 1979-05-27\nitems = ["a"]\n',
        )
        d = load_dictionary(f)
        assert d.flatten() == {"ok": "yes"}

    def test_yaml_non_string_keys_become_strings(self, tmp_path):
        f = tmp_path / "en.yaml"
        f.write_text("name: en\nmap:\n  404: Not found\n")
        d = load_dictionary(f)
        assert d.translate("404") == "Not found"

    def test_logs_loaded_dictionary(self, tmp_path, caplog):
        f = tmp_path / "en.json"
        f.write_text('{"name": "en", "map": {"a": "b", "c": {"d": "e"}}}')
        with caplog.at_level("INFO", logger="dictcascade.loaders.dictionary_loader"):
            load_dictionary(f)
        assert "Loaded dictionary 'en'" in caplog.text
        assert "(2 entries)" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(DictionaryIOError):
            load_dictionary(Path(tmp_path) / "absent.json")
