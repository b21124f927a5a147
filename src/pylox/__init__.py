"""
pylox - a tree-walking interpreter for the Lox expression language.
"""

from pylox._version import get_version

__version__ = get_version()
