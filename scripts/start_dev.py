#!/usr/bin/env python3
"""
Development startup script.

Starts the cart record service in development mode.
"""

import os
import sys
import subprocess
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .[test]")
        return False


def check_env():
    """Report whether a .env file will be picked up."""
    env_file = PROJECT_ROOT / ".env"
    if env_file.exists():
        print("✓ Configuration file found")
    else:
        print("! No .env file, using defaults and FARMCART_* environment variables")
    return True


def start_service():
    """Start the cart record service with auto-reload."""
    port = os.getenv("FARMCART_PORT", "8001")

    print(f"\n🧺 Starting Cart Record Service on http://localhost:{port} ...")
    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "farmcart.server.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", port,
        ],
        cwd=PROJECT_ROOT,
    )

    print("\n" + "=" * 60)
    print("Service started successfully!")
    print("=" * 60)
    print(f"\n📍 Cart API:  http://localhost:{port}/api/carts/<user_id>")
    print(f"📍 API docs:  http://localhost:{port}/docs")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)

    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        process.terminate()
        process.wait()
        print("Service stopped.")


def main():
    print("=" * 60)
    print("Farm Cart - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    check_env()

    print("\n✓ All checks passed!")
    start_service()


if __name__ == "__main__":
    main()
