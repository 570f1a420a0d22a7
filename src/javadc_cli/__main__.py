"""Allow ``python -m javadc_cli``."""

from javadc_cli.cli import main

if __name__ == "__main__":
    main()
