"""Document classification, validation rules and the mapping engine."""
