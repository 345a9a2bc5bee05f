from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

	database_url: str = "sqlite+aiosqlite:///./portal.db"

	# auth
	jwt_secret: str = "change-me"
	jwt_algorithm: str = "HS256"
	jwt_ttl_hours: int = 24
	bcrypt_rounds: int = 12

	# seeded on first start
	admin_username: str = "admin"
	admin_password: str = "admin123"

	# order notifications
	bot_token: str | None = None
	notify_chat_id: int | None = None
	notify_timeout: float = 10.0
	currency_symbol: str = "€"

	webapp_host: str = "0.0.0.0"
	webapp_port: int = 8080

	log_level: str = "INFO"


settings = Settings()
