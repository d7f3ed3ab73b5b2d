"""
Entry point for running the cryptol client as a module.

Usage:
    python -m cryptol_cli sha384 "0x1234"
    python -m cryptol_cli sha384 '(join "Hello World")'
    python -m cryptol_cli call reverse "[1, 2, 3, 4]"
"""

from .commands import main

if __name__ == "__main__":
    main()
