import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "conftree.yml"

DEFAULT_YAML_VERSION = (1, 1)
DEFAULT_MAX_DEPTH = 128


class CTConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.loader = data.get("loader", {})
        self.debug = data.get("debug", False)

    @property
    def yaml_version(self) -> tuple:
        raw = self.loader.get("version")
        if raw is None:
            return DEFAULT_YAML_VERSION
        major, _, minor = str(raw).partition(".")
        return int(major), int(minor or 0)

    @property
    def max_depth(self) -> int:
        return int(self.loader.get("max_depth", DEFAULT_MAX_DEPTH))


def config_path() -> Path:
    override = os.environ.get("CONFTREE_CONFIG")
    return Path(override) if override else CONFIG_PATH


def load_config() -> 'CTConfig':
    path = config_path()
    if not path.exists():
        return CTConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return CTConfig(data)

_config_cache = None

def get_config() -> 'CTConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
