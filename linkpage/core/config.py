from os import getenv

class Settings:
    PUBLIC_BASE_URL = getenv("PUBLIC_BASE_URL", "http://localhost:5173/")  # adresse publique du front
    REMOTE_STORE_URL = getenv("REMOTE_STORE_URL", "http://localhost:8000")
    REQUEST_TIMEOUT = int(getenv("REQUEST_TIMEOUT", "10"))
    LOCAL_CACHE_PATH = getenv("LOCAL_CACHE_PATH", ".linkpage_cache.json")
    NOTICE_SECONDS = float(getenv("NOTICE_SECONDS", "3"))  # les notifications disparaissent au bout de 3s
    SECRET_SCHEME = getenv("SECRET_SCHEME", "plaintext")  # "plaintext" ou "bcrypt"
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
