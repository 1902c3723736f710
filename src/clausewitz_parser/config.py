import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "clausewitz_parser.yml"
CONFIG_ENV_VAR = "CLAUSEWITZ_PARSER_CONFIG"


class ParserConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {})
        self.parser = data.get("parser", {})
        self.logging = data.get("logging", {})
        self.debug = data.get("debug", False)

    @property
    def encoding(self) -> str:
        return self.parser.get("encoding", "utf-8-sig")

    @property
    def check_handler_contract(self) -> bool:
        return bool(self.parser.get("check_handler_contract", True))


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config() -> 'ParserConfig':
    path = config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ParserConfig(data)

_config_cache = None

def get_config() -> 'ParserConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
