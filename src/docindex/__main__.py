"""Allow ``python -m docindex``."""

from docindex.cli import app

app(prog_name="docindex")
