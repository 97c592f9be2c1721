"""
ClipboardAI - Rephrase Selection

Launcher for running from a source checkout: python main.py
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from clipboard_ai.main import main


if __name__ == "__main__":
    main()
