"""ASGI entrypoint for the diabetes tracker API."""

from diabetes_tracker.api.app import create_app
from diabetes_tracker.containers import build_container

app = create_app(build_container())
