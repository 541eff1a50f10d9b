import os

DB_USER = os.getenv("POSTGRES_USER")
DB_PASS = os.getenv("POSTGRES_PASSWORD")
DB_NAME = os.getenv("POSTGRES_DB")
DB_HOST = os.getenv("POSTGRES_URL")
DB_PORT = os.getenv("POSTGRES_PORT", "5432")

DSN = f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

# "memory" or "postgres"
STORE = os.getenv("TTT_STORE", "memory")

# Seconds the AI pretends to think before answering
AI_THINK_DELAY = float(os.getenv("TTT_AI_DELAY", "0.5"))

DEFAULT_DIFFICULTY = os.getenv("TTT_DIFFICULTY", "medium")

LOG_LEVEL = os.getenv("TTT_LOG_LEVEL", "INFO")
