"""
Module entry-point that makes the package runnable with

    python -m prestashop_build_tools

The behaviour is identical to the *prestashop-build-tools* console script.
"""

from prestashop_build_tools.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
