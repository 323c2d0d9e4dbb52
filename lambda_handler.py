"""
AWS Lambda handler for the Profit Sharing Engine API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from profit_sharing import BatchCalculator, ProfitSharingEngine, ProfitSharingRules
from profit_sharing.validators import RulesValidator

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize once (reused across warm invocations)
engine = ProfitSharingEngine()
batch_calculator = BatchCalculator(engine)
rules_validator = RulesValidator()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - GET /formula_types
    - POST /calculate
    - POST /calculate_batch
    - POST /validate_rules
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/formula_types" and http_method == "GET":
        return handle_formula_types()
    elif path == "/calculate" and http_method == "POST":
        return handle_post(event, engine.calculate_from_dict)
    elif path == "/calculate_batch" and http_method == "POST":
        return handle_post(event, batch_calculator.calculate_from_dict)
    elif path == "/validate_rules" and http_method == "POST":
        return handle_post(event, validate_rules)
    else:
        return _response(404, {"error": "Not found", "path": path})


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Profit Sharing Engine API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate": "/calculate [POST]",
                "calculate_batch": "/calculate_batch [POST]",
                "validate_rules": "/validate_rules [POST]",
                "formula_types": "/formula_types [GET]",
                "health": "/health [GET]",
            },
        },
    )


def handle_formula_types():
    """Formula catalog endpoint."""
    return _response(
        200,
        {
            "formula_types": [
                {"type": info.type.value, "label": info.label, "description": info.description}
                for info in engine.get_formula_types()
            ]
        },
    )


def validate_rules(data):
    rules_validator.validate(ProfitSharingRules.from_dict(data))
    return {"status": "valid"}


def handle_post(event, operation):
    """Parse the request body and run an operation on it."""
    try:
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not input_data:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        logger.info(f"Processing {event.get('path') or event.get('rawPath')}")

        result = operation(input_data)

        logger.info("Request processed successfully")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Validation and configuration errors (missing fields, unknown formula type, etc.)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
