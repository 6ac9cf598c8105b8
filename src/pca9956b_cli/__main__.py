"""Allow running the panel with `python -m pca9956b_cli`."""

from pca9956b_cli.cli.main import cli

if __name__ == "__main__":
    cli()
