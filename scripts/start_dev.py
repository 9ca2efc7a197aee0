#!/usr/bin/env python3
"""
Development startup script.

Starts the development shop backend and the storefront in development mode.
"""

import os
import sys
import shutil
import subprocess
import time
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
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check if .env file exists."""
    env_file = PROJECT_ROOT / "config" / ".env"
    env_example = PROJECT_ROOT / "config" / ".env.example"

    if env_file.exists():
        print("✓ Configuration file found")
        return True
    elif env_example.exists():
        print("! Configuration file not found, copying from example...")
        shutil.copy(env_example, env_file)
        print("✓ Created config/.env from example")
        return True
    else:
        print("✗ No configuration file found")
        return False


def start_services():
    """Start both services in development mode."""
    processes = []

    try:
        print("\n🏪 Starting development shop on http://localhost:8000 ...")
        shop_process = subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn",
                "storefront.devshop:app",
                "--reload",
                "--host", "0.0.0.0",
                "--port", "8000",
            ],
            cwd=PROJECT_ROOT,
        )
        processes.append(shop_process)

        # Wait a bit for the shop to start
        time.sleep(2)

        print("🛒 Starting storefront on http://localhost:8080 ...")
        storefront_process = subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn",
                "storefront.main:app",
                "--reload",
                "--host", "0.0.0.0",
                "--port", "8080",
            ],
            cwd=PROJECT_ROOT,
            env={**os.environ, "STOREFRONT_SHOP_API_BASE_URL": "http://localhost:8000"},
        )
        processes.append(storefront_process)

        print("\n" + "=" * 60)
        print("Services started successfully!")
        print("=" * 60)
        print("\n📍 Storefront API: http://localhost:8080/docs")
        print("📍 Shop API:       http://localhost:8000/docs")
        print("\nPress Ctrl+C to stop all services")
        print("=" * 60)

        for p in processes:
            p.wait()

    except KeyboardInterrupt:
        print("\n\nShutting down services...")
        for p in processes:
            p.terminate()
        for p in processes:
            p.wait()
        print("All services stopped.")


def main():
    print("=" * 60)
    print("Storefront - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        sys.exit(1)

    print("\n✓ All checks passed!")

    start_services()


if __name__ == "__main__":
    main()
