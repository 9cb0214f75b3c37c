#!/usr/bin/env python3
"""Compatibility shim for the face mask CLI entry point."""

from app.cli import main

__all__ = ["main"]


if __name__ == "__main__":
    main()
