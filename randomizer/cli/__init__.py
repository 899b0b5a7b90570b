"""Command line entrypoints. Each module exposes main(argv) -> exit code."""
