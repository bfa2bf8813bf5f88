from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/pasteleria_colibri.sqlite3"
    data_dir: str = "./data"
    host: str = "127.0.0.1"
    port: int = 3000
    bcrypt_rounds: int = 10
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
