import os
from dotenv import load_dotenv

# .env first, then .env.local overrides it for local development
load_dotenv()
load_dotenv(".env.local", override=True)

# Option 1: full DATABASE_URL from the environment
# Option 2: just the SQLite file name, default guests.db next to the app
DB_FILE = os.getenv("DB_FILE", "guests.db")
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///./{DB_FILE}"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
