# number_server/config.py
# Paths, logging, config/number/message loading, LAN IP detection

import os
import sys
import logging
import socket
from collections import namedtuple

import tomlkit
from tomlkit.exceptions import TOMLKitError

# --- PyInstaller / dev path detection ---
if getattr(sys, 'frozen', False):
    APP_ROOT = os.path.dirname(sys.executable)
else:
    APP_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# --- File paths ---
CONFIG_PATH = os.environ.get('NUMBER_SERVER_CONFIG', os.path.join(APP_ROOT, 'config.toml'))
NUMBERS_PATH = os.environ.get('NUMBER_SERVER_NUMBERS', os.path.join(APP_ROOT, 'numbers.txt'))
MESSAGE_PATH = os.environ.get('NUMBER_SERVER_MESSAGE', os.path.join(APP_ROOT, 'msg.txt'))

# --- Constants ---
HOST = '0.0.0.0'
DEFAULT_MESSAGE = "No message found"
EXHAUSTED_MESSAGE = "No more numbers"

# --- Logging ---
logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
                    format='%(asctime)s - %(levelname)s - %(message)s')

Settings = namedtuple('Settings', ['port', 'default_fetch_count', 'test_number'])


class ConfigError(Exception):
    """Raised when config.toml is missing, unparseable or invalid."""


def load_config(path=None):
    """Read and validate config.toml. Any problem is fatal for startup."""
    path = path or CONFIG_PATH
    try:
        with open(path, 'r', encoding='utf-8') as f:
            doc = tomlkit.parse(f.read())
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    except TOMLKitError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    data = doc.unwrap()
    missing = [k for k in Settings._fields if k not in data]
    if missing:
        raise ConfigError(f"Missing key(s) in {path}: {', '.join(missing)}")

    port = data['port']; fetch_count = data['default_fetch_count']; test_number = data['test_number']
    # bool is an int subclass; reject `port = true`
    if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 65535:
        raise ConfigError(f"Invalid port in {path}: {port!r}")
    if not isinstance(fetch_count, int) or isinstance(fetch_count, bool) or fetch_count <= 0:
        raise ConfigError(f"default_fetch_count must be a positive integer, got {fetch_count!r}")
    if not isinstance(test_number, str):
        raise ConfigError(f"test_number must be a string, got {test_number!r}")

    return Settings(port=port, default_fetch_count=fetch_count, test_number=test_number)


def split_lines(data):
    """Split on LF only. A trailing CR is dropped from each line, as is the empty piece after a final LF."""
    if not data:
        return []
    lines = data.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def load_numbers(path=None):
    """One token per line, order preserved. Missing file means no numbers."""
    path = path or NUMBERS_PATH
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return tuple(split_lines(f.read()))
    except (OSError, UnicodeDecodeError) as e:
        logging.warning(f"Could not read numbers file {path}: {e}")
        return ()


def load_message(path=None):
    """First line of the message file, or DEFAULT_MESSAGE."""
    path = path or MESSAGE_PATH
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            lines = split_lines(f.read())
    except (OSError, UnicodeDecodeError) as e:
        logging.warning(f"Could not read message file {path}: {e}")
        return DEFAULT_MESSAGE
    return lines[0] if lines else DEFAULT_MESSAGE


# --- LAN IP Detection ---
def get_lan_ip():
    """Return the machine's LAN IP address (best-effort)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.settimeout(0.5)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def check_port_available(host, port):
    """Bind and release (host, port) the way the HTTP server will. Raises OSError if it is taken."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        s.bind((host, port))
    finally:
        s.close()
