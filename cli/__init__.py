"""rircheck command line interface.

The Typer app lives in `cli.main`; it is not imported here so that
`python -m cli.main` runs without a runpy warning.
"""
