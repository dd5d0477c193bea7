#!/usr/bin/env python3
"""Field Mapper - Entry point."""
import os
import sys

# Allow running from a source checkout without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from field_mapper.cli.main import cli


if __name__ == "__main__":
    cli()
