"""Allow ``python -m scriptgen``."""

from scriptgen.main import cli

if __name__ == "__main__":
    cli()
