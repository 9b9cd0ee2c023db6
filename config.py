import os
from dotenv import load_dotenv
load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")

database_config = {
    "MONGO_URI": MONGO_URI,
    "DB_NAME": os.getenv("DB_NAME", "mock_api_service"),
    "USER_COLLECTION": "users",
    "PROJECT_COLLECTION": "projects",
    "RECORD_COLLECTION": "resource_data",
}

JWT_CONFIG = {
    "JWT_SECRET_KEY": os.getenv("JWT_SECRET_KEY", "your-secret-key"),
    "JWT_REFRESH_SECRET_KEY": os.getenv("JWT_REFRESH_SECRET_KEY", "your-refresh-secret-key"),
    "JWT_ALGORITHM": os.getenv("JWT_ALGORITHM", "HS256"),
    # sessions last a week
    "ACCESS_TOKEN_EXPIRE_MINUTES": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 7 * 24 * 60)),
    "REFRESH_TOKEN_EXPIRE_DAYS": int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 30)),
    "COOKIE_SECURE": os.getenv("COOKIE_SECURE", "false").lower() == "true",
}

API_KEY_CONFIG = {
    "HEADER_NAME": "x-api-key",
    "PREFIX": "mk_",
    "TOKEN_BYTES": 16,
}

PAGINATION_CONFIG = {
    "DEFAULT_PAGE": 1,
    "DEFAULT_LIMIT": 10,
    "MAX_LIMIT": 100,
    "DEFAULT_SORT": "createdAt",
    "DEFAULT_ORDER": "desc",
}

FIXTURE_CONFIG = {
    "DEFAULT_COUNT": 10,
    "MAX_COUNT": 100,
    "NUMBER_MIN": 1,
    "NUMBER_MAX": 1000,
    "STRING_WORDS": 3,
    "FAKER_SEED": int(os.getenv("FAKER_SEED")) if os.getenv("FAKER_SEED") else None,
}

CORS_CONFIG = {
    "ALLOW_ORIGINS": [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
}

LOG_CONFIG = {
    "LOG_LEVEL": os.getenv("LOG_LEVEL", "DEBUG"),
    "LOG_TO_FILE": os.getenv("LOG_TO_FILE", "true"),
}
