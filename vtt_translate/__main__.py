"""Package entry point for ``python -m vtt_translate``."""

from vtt_translate.cli import main

if __name__ == "__main__":
    main()
