"""ASGI entrypoint for the campus marketplace."""

from campus_skill.api.app import create_app
from campus_skill.containers import build_container

app = create_app(build_container())
