#!/usr/bin/env python3
"""
Database initialization script
"""
import asyncio
import sys
from pathlib import Path

# Add the project root to the Python path
current_dir = Path(__file__).parent
root_dir = current_dir.parent
sys.path.insert(0, str(root_dir))

async def init_database() -> None:
    """Create every table on the configured database"""
    from geosocial.db.session import init_db, close_db
    from geosocial.config import settings

    print(f"🚀 Initializing database: {settings.database_url}")

    try:
        await init_db()
        print("✅ Database initialized successfully")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)
    finally:
        await close_db()

async def issue_dev_token(user_id: str, email: str) -> None:
    """Print a session token for local testing without the identity provider"""
    from geosocial.services.auth_service import AuthService
    from geosocial.services.redis_service import get_session_store

    token = AuthService(session_store=get_session_store()).create_access_token(
        {"sub": user_id, "email": email}
    )
    print(f"🔑 Bearer token for {email}:\n{token}")
    await get_session_store().close()

def main() -> None:
    if len(sys.argv) > 1 and sys.argv[1] == "token":
        if len(sys.argv) != 4:
            print("Usage: db_init.py token <user_id> <email>")
            sys.exit(2)
        asyncio.run(issue_dev_token(sys.argv[2], sys.argv[3]))
    else:
        asyncio.run(init_database())

if __name__ == "__main__":
    main()
