"""ASGI entrypoint for the diary trends API."""

from diary_trends.api.app import create_app
from diary_trends.containers import build_container

app = create_app(build_container())
