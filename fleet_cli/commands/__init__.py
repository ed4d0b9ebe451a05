"""
CLI command modules.
"""

from fleet_cli.commands import compilation, inventory

__all__ = ["compilation", "inventory"]
