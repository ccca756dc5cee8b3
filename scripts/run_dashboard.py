#!/usr/bin/env python3
"""
Dashboard entrypoint - launches the Textual incident dashboard against the REST API.
"""

import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports (src/ and tui/ are both in project root)
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    """Dashboard entrypoint - validates configuration and launches the dashboard."""
    try:
        from tui.main import main as tui_main
        tui_main()
        return 0
    except ImportError as e:
        print(f"❌ Failed to import TUI dashboard: {e}")
        print("   Make sure textual is installed: pip install textual")
        return 1
    except KeyboardInterrupt:
        print("\nℹ️  Dashboard interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
