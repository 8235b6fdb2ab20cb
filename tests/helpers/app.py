"""Importable registry used by the CLI tests."""

from simpleweb.handlers import HandlerRegistry

from .handlers import AcceptJob, CreateWidget, PlaceOrder


registry = HandlerRegistry()
registry.register(CreateWidget, "/widgets")
registry.register(AcceptJob, "/jobs")
registry.register(PlaceOrder, "/orders")

not_a_registry = object()
