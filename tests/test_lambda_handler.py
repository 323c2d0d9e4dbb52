"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import engine, lambda_handler


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"
        assert "environment" in body

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "calculate_batch" in body["endpoints"]

    def test_formula_types(self):
        event = {"httpMethod": "GET", "path": "/formula_types"}
        response = lambda_handler(event, None)

        body = json.loads(response["body"])
        assert response["statusCode"] == 200
        assert len(body["formula_types"]) == 7
        assert body["formula_types"][0]["type"] == "FIXED_ONLY"

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/calculate"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_http_api_event_format(self):
        """HTTP API (v2) events carry method and path elsewhere."""
        event = {"requestContext": {"http": {"method": "GET"}}, "rawPath": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_calculate_success(self):
        """POST /calculate computes a tiered share."""
        payload = {
            "project_id": "p1",
            "project_name": "Plaza Norte",
            "total_income": 200000,
            "total_cost": 120000,
            "rules": {
                "formula_type": "TIERED",
                "tiers": [
                    {"min_profit": 0, "max_profit": 50000, "percent_rate": 10},
                    {"min_profit": 50000, "max_profit": None, "percent_rate": 20},
                ],
            },
        }

        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["total_share"] == 11000.0
        assert len(body["breakdown"]) == 2

    def test_base64_body(self):
        payload = {"net_profit": 100000, "rules": {"formula_type": "PERCENT_SIMPLE", "percent_rate": 10}}
        event = {
            "httpMethod": "POST",
            "path": "/calculate",
            "isBase64Encoded": True,
            "body": base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii"),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["total_share"] == 10000.0

    def test_calculate_batch(self):
        payload = {
            "year": 2025,
            "month": 3,
            "projects": [{"project_id": "p1", "name": "Bodega Sur"}],
            "results": [],
        }
        event = {"httpMethod": "POST", "path": "/calculate_batch", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["summary"]["projects_skipped"] == 1

    def test_calculate_batch_isolates_errors(self):
        """A misconfigured project is reported while its siblings are calculated."""
        payload = {
            "inputs": [
                {"project_id": "p1", "net_profit": 100000, "rules": {"formula_type": "PERCENT_SIMPLE", "percent_rate": 10}},
                {"project_id": "p2", "net_profit": 100000, "rules": {"formula_type": "BONUS_POOL"}},
                {"project_id": "p3", "net_profit": 100000, "rules": {"formula_type": "SPECIAL_FORMULA", "minimum_profit": "NaN"}},
            ]
        }
        event = {"httpMethod": "POST", "path": "/calculate_batch", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["summary"]["projects_calculated"] == 1
        assert body["summary"]["projects_errored"] == 2
        assert [s["project_id"] for s in body["skipped"]] == ["p2", "p3"]
        assert all(s["reason"] == "calculation_error" for s in body["skipped"])

    def test_calculate_non_finite_profit(self):
        payload = {"net_profit": "Infinity", "rules": {"formula_type": "PERCENT_SIMPLE", "percent_rate": 10}}
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_validate_rules(self):
        payload = {"formula_type": "PERCENT_SIMPLE", "percent_rate": 10}
        event = {"httpMethod": "POST", "path": "/validate_rules", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"status": "valid"}

    def test_validate_rules_rejects_bad_percent(self):
        payload = {"formula_type": "PERCENT_SIMPLE", "percent_rate": 150}
        event = {"httpMethod": "POST", "path": "/validate_rules", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_empty_body(self):
        """POST with empty body returns 400."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "failed"

    def test_invalid_json(self):
        """POST with invalid JSON returns 400."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": "{not valid json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "Invalid JSON" in body["error"]

    def test_unknown_formula_type(self):
        """Unknown formula type returns 400 with validation error."""
        payload = {"net_profit": 1000, "rules": {"formula_type": "BONUS_POOL"}}
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["status"] == "validation_failed"
        assert "BONUS_POOL" in body["error"]

    def test_missing_rules(self):
        payload = {"net_profit": 1000}
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_unexpected_error_is_generic(self, monkeypatch):
        """Unexpected errors return 500 without internal details."""

        def explode(data):
            raise RuntimeError("database password leaked")

        monkeypatch.setattr(engine, "calculate_from_dict", explode)
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps({"net_profit": 1})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 500
        assert "password" not in response["body"]
