"""Allow ``python -m prestashop_build_tools.cli``."""

from prestashop_build_tools.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
