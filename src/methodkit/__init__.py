"""methodkit: bootstrap methodology files into a project from Markdown templates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("methodkit")
except PackageNotFoundError:
    __version__ = "0.0.0"
