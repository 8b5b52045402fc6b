"""Configuration management for the PDF proofreader."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# Model Configuration
DEFAULT_MODEL = os.getenv("PROOFREADER_MODEL", "llama-3.3-70b-versatile")
TEMPERATURE = 0.0

# Overall deadline shared by every API call of a run
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "120"))

# Token counting (Llama 3 vocabulary approximation)
TOKEN_ENCODING = "o200k_base"
