"""Central configuration loader for the home remodeling assistant."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
SCHEMAS_DIR = CONFIG_DIR / "schemas"
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Schema and catalog file paths
PROJECT_SCHEMA = SCHEMAS_DIR / "project.schema.json"
PROJECT_TEMPLATES_FILE = CONFIG_DIR / "project_templates.json"

# Project record rules
PROJECT_STATUSES = ["planning", "in_progress", "completed", "on_hold"]
DEFAULT_STATUS = "planning"

# Fields counted by the completion score alongside every area leaf.
BASIC_FIELDS = ("name", "description", "location")

# Sentinel written by room templates for "not answered yet"
UNKNOWN_VALUE = "unknown"

# Per-area missing fields reported back to the assistant
MISSING_INFO_LIMIT = 5

# Completion tiers (percent)
COMPLETION_NEEDS_INFO_BELOW = 50
COMPLETION_WELL_PLANNED_FROM = 90

# Seconds a listProjects result is reused for the same user
LIST_PROJECTS_CACHE_TTL = float(os.getenv("LIST_PROJECTS_CACHE_TTL", "5"))

# Chat limits
MESSAGE_MAX_LENGTH = 10000
FIRST_TURN_MAX_STEPS = 3
MAX_TOOL_STEPS = 10

# LLM configuration (chat assistant with tool calling)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1024"))
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_ENABLED = os.getenv("LLM_ENABLED", "true").lower() in ("true", "1", "yes")
