"""
Shared test configuration.

Environment overrides are set before the app package is imported so
the cached settings pick them up.
"""

import os

os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "1000")
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("AI_ENDPOINT", "http://ai.test/translate")
