#!/usr/bin/env python3
"""
Gallery Storefront Runner
=========================

Script to run the gallery backend in different modes.

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --init-db          # Create database tables and exit
    python run_app.py --admin-token      # Print a local admin token and exit
"""

import argparse
import asyncio
import os
import sys

def check_environment():
    """Check if environment is properly set up"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using process environment")

    missing = [name for name in ("DATABASE_URL", "SECRET_KEY") if not os.environ.get(name)]
    if missing and not os.path.exists(".env"):
        print(f"❌ Missing required settings: {', '.join(missing)}")
        return False

    return True

def init_database():
    """Create all tables"""
    from gallery.core.database import init_db, close_db

    async def _run():
        await init_db()
        await close_db()

    asyncio.run(_run())
    print("✅ Database tables created")

def print_admin_token(subject: str, minutes: int):
    """Mint an admin JWT signed with the local SECRET_KEY"""
    from gallery.core.security import SecurityUtils

    token = SecurityUtils.create_access_token(
        {"sub": subject, "role": "admin"},
        expires_minutes=minutes
    )
    print(token)

def run_app(host="0.0.0.0", port=8000, reload=True, workers=None):
    """Run the FastAPI application"""
    from gallery.core.config import settings

    workers = workers or settings.WORKERS
    print(f"\n🚀 Starting Gallery API on {host}:{port}")
    print(f"📖 API Docs: http://{host}:{port}/api/docs")
    print("\n" + "=" * 50)

    import uvicorn
    uvicorn.run(
        "gallery.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=None if reload else workers,
        log_level="info"
    )

def main():
    parser = argparse.ArgumentParser(
        description="Gallery Storefront Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_app.py                      # Development server on port 8000
  python run_app.py --mode prod          # Production mode
  python run_app.py --init-db            # Create tables
  python run_app.py --admin-token        # Local admin token for the back office
        """
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes in prod mode (default: WORKERS setting)"
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create database tables and exit"
    )
    parser.add_argument(
        "--admin-token",
        action="store_true",
        help="Print an admin access token and exit"
    )
    parser.add_argument(
        "--subject",
        default="local-admin",
        help="Token subject for --admin-token (default: local-admin)"
    )
    parser.add_argument(
        "--token-minutes",
        type=int,
        default=60,
        help="Token lifetime for --admin-token (default: 60)"
    )

    args = parser.parse_args()

    if not check_environment():
        return 1

    if args.admin_token:
        print_admin_token(args.subject, args.token_minutes)
        return 0

    if args.init_db:
        init_database()
        return 0

    run_app(
        args.host,
        args.port,
        reload=args.mode == "dev",
        workers=args.workers
    )
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
