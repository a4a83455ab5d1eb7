"""
Generators — produce source files from a resolved configuration.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile`` instance.
"""
