"""Allow ``python -m quome``."""

from quome.cli.main import run


if __name__ == "__main__":
    run()
