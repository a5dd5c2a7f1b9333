"""ASGI entrypoint for the care inventory API."""

from care_inventory.api.app import create_app
from care_inventory.containers import build_container

app = create_app(build_container())
