import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path.cwd()

# Default provider and language
AI_PROVIDER = os.getenv("AI_PROVIDER", "gemini")
AI_DEFAULT_LANGUAGE = os.getenv("AI_DEFAULT_LANGUAGE", "English")

# Optional model override for the active provider
AI_CUSTOM_MODEL = os.getenv("AI_CUSTOM_MODEL", "")

# Provider API keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GROK_API_KEY = os.getenv("GROK_API_KEY") or os.getenv("XAI_API_KEY")
CLAUDE_API_KEY = os.getenv("CLAUDE_API_KEY") or os.getenv("ANTHROPIC_API_KEY")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
GLM_API_KEY = os.getenv("GLM_API_KEY") or os.getenv("ZHIPUAI_API_KEY")

# Per-provider model overrides (empty means registry default)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "")
GROK_MODEL = os.getenv("GROK_MODEL", "")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "")
GLM_MODEL = os.getenv("GLM_MODEL", "")

# HTTP timeout (seconds) for every vendor call
AI_REQUEST_TIMEOUT = float(os.getenv("AI_REQUEST_TIMEOUT", "120"))

# Synthesis defaults (long-form output)
SYNTHESIS_TEMPERATURE = float(os.getenv("SYNTHESIS_TEMPERATURE", "0.7"))
SYNTHESIS_MAX_TOKENS = int(os.getenv("SYNTHESIS_MAX_TOKENS", "8192"))

# Note sink configuration
NOTE_SINK_TYPE = os.getenv("NOTE_SINK_TYPE", "local")  # Options: 'local'
NOTES_DIR_STR = os.getenv("NOTES_DIR", str(BASE_DIR / "notes"))
NOTES_DIR = Path(NOTES_DIR_STR)
