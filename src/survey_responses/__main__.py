"""
Entry point for running survey_responses as a module.

Usage:
    $ python -m survey_responses serve --port 3000
    $ python -m survey_responses export -o responses.csv
    $ python -m survey_responses fields
"""
from .main import run_cli

if __name__ == "__main__":
    run_cli()
