"""nodebridge — npm dependencies for package-manager hooks, node scripts with a fallback."""

__version__ = "0.1.0"
