"""
BootKit - bootstrap a development checkout.

Runs an ordered list of build and install steps against subdirectories of a
project, stopping at the first failure, with one optional step chosen
interactively or through the INSTALL_NODE_CLI environment variable.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bootkit")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
