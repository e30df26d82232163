# anymessage/cli/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

# This cli/config.py file is at <project root>/anymessage/cli/config.py
project_root = Path(__file__).parent.parent.parent.resolve()

load_dotenv(dotenv_path=project_root / '.env', override=True)

# API configuration for CLI client communication
ANYMESSAGE_CLI_API_BASE_URL = os.getenv("ANYMESSAGE_CLI_API_BASE_URL", "http://127.0.0.1:8000")

# Secret used to register users on behalf of the host application
ANYMESSAGE_CLI_HOST_APP_SECRET = os.getenv("HOST_APP_REGISTRATION_SECRET")
