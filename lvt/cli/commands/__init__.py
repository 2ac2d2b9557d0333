"""Implementations behind the ``lvt`` commands."""
