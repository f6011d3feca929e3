"""Schema model, docstring annotation parser, class introspection and schema extraction."""
