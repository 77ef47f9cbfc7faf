import os

DOC_EXTRACT_URL = os.getenv("DOC_EXTRACT_URL", "http://doc-extract:8000").rstrip("/")
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "120"))

LOW_CONFIDENCE = 0.7
