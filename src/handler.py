import base64
import json

from knowledge.builder import get_knowledge_base
from llm.gemini_client import generate_with_retry, is_overloaded
from rag.prompt import build_prompt
from utils.logger import logger

# CORS headers for API Gateway responses
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

NO_ANSWER = "No AI answer returned."
BUSY_MESSAGE = "Gemini model is busy. Please try again in a moment."
GENERIC_ERROR = "Gemini API Error"

# Build during cold start; every invocation on this container reuses it
get_knowledge_base()


def _get_method(event):
    # REST API (v1) and HTTP API (v2) payloads carry the method differently
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "")
    return method.upper()


def _parse_body(event):
    raw = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    body = json.loads(raw)
    if not isinstance(body, dict):
        raise ValueError(f"Request body must be a JSON object, got {type(body).__name__}")
    return body


def lambda_handler(event, context):
    method = _get_method(event)
    logger.info(f"Received {method or 'UNKNOWN'} request")

    if method == "OPTIONS":
        return {
            "statusCode": 204,
            "headers": PREFLIGHT_HEADERS,
            "body": "",
        }

    if method != "POST":
        return {
            "statusCode": 405,
            "headers": {"Content-Type": "text/plain"},
            "body": "Method Not Allowed",
        }

    try:
        body = _parse_body(event)
        user_query = body.get("user_query") or ""

        prompt = build_prompt(user_query, get_knowledge_base())
        answer = generate_with_retry(prompt)

        return {
            "statusCode": 200,
            "headers": CORS_HEADERS,
            "body": json.dumps({"answer": (answer or NO_ANSWER).strip()})
        }

    except Exception as e:
        logger.exception(f"Error processing request: {e}")
        message = BUSY_MESSAGE if is_overloaded(e) else GENERIC_ERROR
        return {
            "statusCode": 500,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": message})
        }
