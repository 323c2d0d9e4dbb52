from flask import Flask, request, jsonify
from flask_cors import CORS
from profit_sharing import BatchCalculator, ProfitSharingEngine, ProfitSharingRules
from profit_sharing.validators import RulesValidator
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (report and dashboard frontends call the API)
CORS(app)

# Stateless, shared across requests
engine = ProfitSharingEngine()
batch_calculator = BatchCalculator(engine)
rules_validator = RulesValidator()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Profit Sharing Engine API",
        "version": "1.0",
        "endpoints": {
            "calculate": "/calculate [POST]",
            "calculate_batch": "/calculate_batch [POST]",
            "validate_rules": "/validate_rules [POST]",
            "formula_types": "/formula_types [GET]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/formula_types", methods=["GET"])
def formula_types():
    """Formula catalog for the rule configuration screen"""
    return jsonify({
        "formula_types": [
            {"type": info.type.value, "label": info.label, "description": info.description}
            for info in engine.get_formula_types()
        ]
    }), 200


def _handle(operation, describe):
    """Run an operation on the JSON body, mapping errors to status codes."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        label = describe(input_data)
        logger.info(f"Processing {label}")

        result = operation(input_data)

        logger.info(f"Processed successfully: {label}")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation and configuration errors from the engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/calculate", methods=["POST"])
def calculate():
    """Calculate profit sharing for a single project"""
    return _handle(
        engine.calculate_from_dict,
        lambda data: f"project: {data.get('project_name', 'Unknown')}",
    )


@app.route("/calculate_batch", methods=["POST"])
def calculate_batch():
    """Calculate profit sharing for many projects or a whole period"""
    return _handle(
        batch_calculator.calculate_from_dict,
        lambda data: f"batch of {len(data.get('inputs', data.get('projects', [])))} projects",
    )


@app.route("/validate_rules", methods=["POST"])
def validate_rules():
    """Validate a rules configuration before it is saved"""

    def validate(data):
        rules_validator.validate(ProfitSharingRules.from_dict(data))
        return {"status": "valid"}

    return _handle(validate, lambda data: f"rules: {data.get('formula_type', 'Unknown')}")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
