"""
Fleet Agent CLI

Command-line interface for the agent compilation layer.

Usage:
    python -m fleet_cli compile association.json --out state.json
    python -m fleet_cli inventory --policy ./InventoryPolicy.json --json
"""

__version__ = "0.1.0"
