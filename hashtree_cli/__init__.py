"""
hashtree CLI

Command-line interface for building hash trees and checking positions.

Usage:
    python -m hashtree_cli root "Hello World" "Bye, bye"
    python -m hashtree_cli verify --position 1 --value "Bye, bye" "Hello World" "Bye, bye"
    python -m hashtree_cli config --show
"""

__version__ = "0.1.0"
