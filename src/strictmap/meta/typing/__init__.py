"""Typing helpers: annotation utilities and the builtin type registry."""
