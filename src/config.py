import os

AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
LLM_TEMPERATURE = 0.2

# Retry budget for overloaded Gemini responses
MAX_ATTEMPTS = 3
BACKOFF_STEP_SECONDS = 0.5

# Datasets ship alongside the handler unless DATA_BUCKET points at S3
DATA_DIR = os.environ.get("DATA_DIR", os.path.dirname(os.path.abspath(__file__)))
DATA_BUCKET = os.environ.get("DATA_BUCKET")
DATA_PREFIX = os.environ.get("DATA_PREFIX", "")

MARKETING_LOGS_FILE = "data.json"
PURCHASE_ORDERS_FILE = "purchase_orders.json"
SALES_ORDERS_FILE = "sales_orders.json"
