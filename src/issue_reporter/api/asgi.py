"""ASGI entrypoint for the issue reporter API."""

from issue_reporter.api.app import create_app
from issue_reporter.containers import build_container

app = create_app(build_container())
