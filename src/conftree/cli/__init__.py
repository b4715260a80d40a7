from conftree.cli.app import app, main

__all__ = ["app", "main"]
