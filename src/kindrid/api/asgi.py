"""ASGI entrypoint for the Kindrid server."""

from kindrid.api.app import create_app
from kindrid.containers import build_container

app = create_app(build_container())
