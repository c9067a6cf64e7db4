"""Allow ``python -m notejournal``."""

from notejournal.interfaces.cli.app import run_cli

if __name__ == "__main__":
    run_cli()
