#!/usr/bin/python3

"""
Entry point script for running rawedit from a source checkout.
"""

from src.rawedit.__main__ import main


if __name__ == "__main__":
    main()
