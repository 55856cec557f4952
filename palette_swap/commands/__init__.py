"""CLI commands.

Every module here that defines a `command` object is registered by
palette_swap.registry.discover(). The module docstring is the command's
`palette-swap help` text.
"""
