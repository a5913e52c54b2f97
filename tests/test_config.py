"""Tests for config.toml, numbers.txt and msg.txt loading."""

import socket

import pytest

from number_server import config
from number_server.config import ConfigError, Settings


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestLoadConfig:
    def test_valid_config(self, tmp_path):
        path = write(tmp_path, "config.toml", 'port = 8080\ndefault_fetch_count = 10\ntest_number = "123"\n')
        assert config.load_config(path) == Settings(port=8080, default_fetch_count=10, test_number="123")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read"):
            config.load_config(str(tmp_path / "nope.toml"))

    def test_unparseable_file(self, tmp_path):
        path = write(tmp_path, "config.toml", "port = = 1\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            config.load_config(path)

    def test_missing_key(self, tmp_path):
        path = write(tmp_path, "config.toml", 'port = 8080\ntest_number = "1"\n')
        with pytest.raises(ConfigError, match="default_fetch_count"):
            config.load_config(path)

    @pytest.mark.parametrize("body", [
        'port = 70000\ndefault_fetch_count = 1\ntest_number = "1"\n',
        'port = "80"\ndefault_fetch_count = 1\ntest_number = "1"\n',
        'port = 80\ndefault_fetch_count = 0\ntest_number = "1"\n',
        'port = 80\ndefault_fetch_count = -5\ntest_number = "1"\n',
        'port = 80\ndefault_fetch_count = 2\ntest_number = 1\n',
    ])
    def test_invalid_values(self, tmp_path, body):
        path = write(tmp_path, "config.toml", body)
        with pytest.raises(ConfigError):
            config.load_config(path)


class TestLoadNumbers:
    def test_one_number_per_line_in_order(self, tmp_path):
        path = write(tmp_path, "numbers.txt", "3\n1\n2\n")
        assert config.load_numbers(path) == ("3", "1", "2")

    def test_windows_line_endings(self, tmp_path):
        path = tmp_path / "numbers.txt"
        path.write_bytes(b"1\r\n2\r\n")
        assert config.load_numbers(str(path)) == ("1", "2")

    def test_only_line_feeds_split_tokens(self, tmp_path):
        path = tmp_path / "numbers.txt"
        path.write_bytes(b"12\x0c34\n56\r78\n")
        assert config.load_numbers(str(path)) == ("12\x0c34", "56\r78")

    def test_blank_lines_are_kept(self, tmp_path):
        path = write(tmp_path, "numbers.txt", "1\n\n2")
        assert config.load_numbers(path) == ("1", "", "2")

    def test_missing_file_is_empty(self, tmp_path):
        assert config.load_numbers(str(tmp_path / "missing.txt")) == ()


class TestLoadMessage:
    def test_first_line_only(self, tmp_path):
        path = write(tmp_path, "msg.txt", "hello\nsecond line\n")
        assert config.load_message(path) == "hello"

    def test_missing_file_uses_fallback(self, tmp_path):
        assert config.load_message(str(tmp_path / "missing.txt")) == "No message found"

    def test_empty_file_uses_fallback(self, tmp_path):
        path = write(tmp_path, "msg.txt", "")
        assert config.load_message(path) == "No message found"
    def test_first_line_keeps_form_feed(self, tmp_path):
        path = tmp_path / "msg.txt"
        path.write_bytes(b"hi\x0cthere\r\nnext\n")
        assert config.load_message(str(path)) == "hi\x0cthere"


class TestSplitLines:
    @pytest.mark.parametrize("data, expected", [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("a\n\n", ["a", ""]),
        ("a b\x85c", ["a b\x85c"]),
    ])
    def test_split(self, data, expected):
        assert config.split_lines(data) == expected


class TestCheckPortAvailable:
    def test_taken_port_raises(self):
        holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        holder.bind(("0.0.0.0", 0))
        holder.listen(1)
        try:
            with pytest.raises(OSError):
                config.check_port_available("0.0.0.0", holder.getsockname()[1])
        finally:
            holder.close()

    def test_free_port_passes(self):
        config.check_port_available("127.0.0.1", 0)
