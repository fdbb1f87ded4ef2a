"""Allow ``python -m launchgen``."""

from launchgen.main import cli

if __name__ == "__main__":
    cli()
