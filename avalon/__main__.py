"""
Main entry point for the avalon package.

Allows running the gateway as: python -m avalon
"""

from avalon.cli import main

if __name__ == "__main__":
    main()
