"""Core building blocks: models, document tree, store, conditions, plugins."""
