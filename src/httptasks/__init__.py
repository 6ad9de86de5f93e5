from ._version import __version__
from .config import Config, HttpTask, load_config, loads_config

__all__ = ["__version__", "Config", "HttpTask", "load_config", "loads_config"]
