"""Codec Tester CLI Package.

Public API:
- create_parser: Argument parser for the harness
- main: CLI entry point
"""

from codec_tester.cli.main import create_parser, main

__all__ = ["create_parser", "main"]
