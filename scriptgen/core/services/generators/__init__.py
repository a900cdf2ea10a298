"""
Generators — produce file content from a generation request.

Each generator module exposes a ``render_*()`` function that returns
a ``GeneratedScript`` instance.
"""
