"""Environment-driven configuration for the database and the data generator."""

import os
from dotenv import load_dotenv

# Load environment
load_dotenv(".env")

# Database connection parameters
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "postgres")
DB_PORT = os.getenv("POSTGRES_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "postgres")

# Database connection URL
DB_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

# Readiness polling
DB_MAX_RETRIES = int(os.getenv("DB_MAX_RETRIES", "20"))
DB_RETRY_DELAY = int(os.getenv("DB_RETRY_DELAY", "2"))

# Data generator
GENERATOR_SEED = os.getenv("GENERATOR_SEED")
GENERATOR_USERS = int(os.getenv("GENERATOR_USERS", "5"))
GENERATOR_PRODUCTS = int(os.getenv("GENERATOR_PRODUCTS", "10"))
GENERATOR_ORDERS = int(os.getenv("GENERATOR_ORDERS", "3"))
REVIEWS_PER_USER = int(os.getenv("REVIEWS_PER_USER", "2"))
MAX_REVIEWS = int(os.getenv("MAX_REVIEWS", "50"))
MAX_UNIQUE_ATTEMPTS = int(os.getenv("MAX_UNIQUE_ATTEMPTS", "1000"))

# CSV datasets
DATA_DIR = os.getenv("DATA_DIR", "/app/data/")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


def get_seed():
    """Return the configured generator seed, or None for a random run."""
    if GENERATOR_SEED is None or GENERATOR_SEED == "":
        return None
    return int(GENERATOR_SEED)
