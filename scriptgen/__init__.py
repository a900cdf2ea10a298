"""scriptgen — generate hardened Bash script skeletons."""

__version__ = "0.1.0"
