"""Package entry point for ``python -m compdb_converter``."""

from compdb_converter.cli import main

if __name__ == "__main__":
    main()
