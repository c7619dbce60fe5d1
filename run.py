#!/usr/bin/env python3
"""
Electronic Check System Entry Point

Starts the FastAPI server with the electronic check system.
"""

import sys

from echeck.api import run_server
from echeck.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("🧾 Starting Electronic Check System...")
    print(f"💾 Ledger storage: {config.storage_backend}")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()
    
    try:
        run_server(debug=False)
    except KeyboardInterrupt:
        print("\n👋 Shutting down Electronic Check System...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
