"""ASGI entrypoint for the buy-in ledger bot."""

from buyin_ledger.api.app import create_app
from buyin_ledger.containers import build_container

app = create_app(build_container())
