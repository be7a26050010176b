import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables."""
    
    def __init__(self):
        self.APP_NAME = os.environ.get("APP_NAME", "InsightHub")
        self.ENV = os.environ.get("ENV", "development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
        
        # LLM Provider Configuration
        # none = deterministic insights only, gemini / auto = use Gemini when a key is set
        self.LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "none").lower()
        self.GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
        self.GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash-lite")
        
        # File storage
        self.UPLOAD_DIR = os.environ.get("UPLOAD_DIR", str(Path("data") / "uploads"))
        
        # Profiling limits
        self.SCHEMA_SAMPLE_SIZE = int(os.environ.get("SCHEMA_SAMPLE_SIZE", "100"))
        self.PREVIEW_ROW_LIMIT = int(os.environ.get("PREVIEW_ROW_LIMIT", "100"))
        self.PROMPT_DATA_CHARS = int(os.environ.get("PROMPT_DATA_CHARS", "5000"))
    
    def __repr__(self):
        return (
            f"Settings(APP_NAME={self.APP_NAME}, ENV={self.ENV}, "
            f"LOG_LEVEL={self.LOG_LEVEL}, LLM_PROVIDER={self.LLM_PROVIDER}, "
            f"UPLOAD_DIR={self.UPLOAD_DIR}, SCHEMA_SAMPLE_SIZE={self.SCHEMA_SAMPLE_SIZE})"
        )


settings = Settings()
