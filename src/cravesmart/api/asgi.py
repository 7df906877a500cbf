"""ASGI entrypoint for the CraveSmart API."""

from cravesmart.api.app import create_app
from cravesmart.containers import build_container

app = create_app(build_container())
