#!/usr/bin/env python3
"""
Enable execution of the pgsqlclient package as a module.

This allows running the package with: python -m pgsqlclient
"""

from .cli.main import main

if __name__ == "__main__":
    main()
