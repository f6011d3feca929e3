"""Metaprogramming helpers."""
