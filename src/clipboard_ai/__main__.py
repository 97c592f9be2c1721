"""Allow running with `python -m clipboard_ai`."""

from clipboard_ai.main import main

if __name__ == "__main__":
    main()
