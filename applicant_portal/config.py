import os
from pathlib import Path
from dotenv import load_dotenv

# Find and load .env file
current_dir = Path(__file__).resolve().parent  # applicant_portal/
backend_dir = current_dir.parent                # project root
env_path = backend_dir / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

# DATABASE
MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "applicant_portal")

# AUTH
SECRET_KEY = os.getenv("SECRET_KEY", "super_secret_random_key_CHANGE_THIS")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# CORS
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]

# COOLDOWNS
EDIT_COOLDOWN_HOURS = float(os.getenv("EDIT_COOLDOWN_HOURS", "24"))
NUDGE_COOLDOWN_HOURS = float(os.getenv("NUDGE_COOLDOWN_HOURS", "24"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
