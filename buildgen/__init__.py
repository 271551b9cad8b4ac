import os

from dotenv import load_dotenv

# Tests run against the process environment only
if not os.getenv("PYTEST_CURRENT_TEST"):
    load_dotenv(os.getenv("BUILDGEN_ENV_FILE") or None, override=False)
