"""
Конфигурация бэкенда.
"""

from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv()

# Корневая директория проекта и базовые настройки
BASE_DIR = Path(__file__).parent.parent  # backend/
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOGS_DIR = BASE_DIR / "logs"


# ============= DATA =============
DATA_DIR = BASE_DIR / "data"

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{str(DATA_DIR / 'app.db')}")


# ============= БЕЗОПАСНОСТЬ =============
# Секрет подписи токенов. Без него приложение не стартует
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Минимальная допустимая длина пароля
MIN_PASSWORD_LENGTH = 7


# ============= API =============
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "4000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
