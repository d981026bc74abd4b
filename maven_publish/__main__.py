"""Allow ``python -m maven_publish``."""

from .cli import app

app()
