#!/usr/bin/env python3
"""
FlixVault Startup Script
"""

import asyncio
import secrets
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

SECRET_PLACEHOLDER = "SECRET_KEY=change-this-to-a-random-secret-key"


def generate_env_file():
    """Generate .env file if it doesn't exist"""
    env_path = Path(__file__).parent.parent / ".env"
    env_example = Path(__file__).parent.parent / ".env.example"

    if env_path.exists():
        return

    if not env_example.exists():
        print("Warning: .env.example not found, using default configuration")
        return

    # Copy example and generate secret key
    content = env_example.read_text()
    content = content.replace(
        SECRET_PLACEHOLDER, f"SECRET_KEY={secrets.token_urlsafe(48)}"
    )
    env_path.write_text(content)
    print("Generated .env file with random secret key")


async def main():
    """Initialize the database and run the API server"""
    import uvicorn

    # Generate .env before settings are read
    generate_env_file()

    from flixvault.config import settings
    from flixvault.database import init_db

    print("Initializing database...")
    await init_db()
    print("Database initialized successfully.")

    print(f"""
    FlixVault

      API Server:        http://{settings.HOST}:{settings.PORT}
       - API Documentation: http://{settings.HOST}:{settings.PORT}/docs
       - Health:            http://{settings.HOST}:{settings.PORT}/api/health
       - OMDb lookups:      {"enabled" if settings.OMDB_API_KEY else "disabled (set OMDB_API_KEY)"}

    Press CTRL+C to stop the server
    """)

    config = uvicorn.Config(
        "flixvault.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
