"""Installed pylox version."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("pylox")
    except PackageNotFoundError:
        return "0.0.0"
