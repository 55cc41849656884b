from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "MiniParty"

    # Server
    PORT: int = 8080
    ENVIRONMENT: str = "development"

    # Security
    ADMIN_SECRET: str = ""

    # Frontend
    CORS_ORIGIN: str = "http://localhost:5173"
    DIST_PATH: str = "./dist"

    # Storage ("sqlite" or "supabase")
    STORAGE_BACKEND: str = "sqlite"
    DATABASE_PATH: str = "data/bookings.db"

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Admin dashboard
    API_URL: str = "http://localhost:8080"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
