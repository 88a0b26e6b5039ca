from .binaries import binaries
from .config import config
from .init import init
from .log import log
from .variants import variants
from .version import version

__all__ = ["binaries", "config", "init", "log", "variants", "version"]
