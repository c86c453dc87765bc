"""
CLI command modules.
"""

from hashtree_cli.commands import root, verify

__all__ = ["root", "verify"]
