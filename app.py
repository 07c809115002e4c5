"""Production entry point for the document intake service using uvicorn"""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

env_path = Path(__file__).parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

if __name__ == "__main__":
    PORT = int(os.getenv("PORT", "3000"))
    HOST = os.getenv("HOST", "127.0.0.1")
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

    print(f"Starting document intake in {ENVIRONMENT} mode...")
    print(f"Host: {HOST}, Port: {PORT}")

    uvicorn.run(
        "intake_web.main:create_app",
        factory=True,
        host=HOST,
        port=PORT,
        # Identities live in process memory: one worker shares one store
        workers=1,
        log_level=(os.getenv("LOG_LEVEL") or "info").lower(),
        access_log=True,
    )
