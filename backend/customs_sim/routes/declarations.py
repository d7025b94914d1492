"""
Declaration Validation Routes
Handles customs declaration validation, auto-fix and code table lookup
"""
import json
import logging
from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from customs_sim.models.customs import AutoFixRequest, ValidateRequest
from customs_sim.services.rule_tables import get_rule_tables
from customs_sim.validation import FieldPathError, create_validator, status_message

logger = logging.getLogger('customsim.declarations')

bp = Blueprint('declarations', __name__, url_prefix='/api/declarations')


def invalid_declaration(error: ValidationError):
    """400 response listing the structural problems pydantic found"""
    details = json.loads(error.json(include_url=False))
    logger.warning(f"Rejected declaration with {len(details)} structural error(s)")
    return jsonify({'error': 'Invalid declaration', 'details': details}), 400


def report_payload(report) -> dict:
    payload = report.model_dump(mode='json', by_alias=True)
    payload['message'] = status_message(report.overall_status)
    return payload


@bp.route('/validate', methods=['POST'])
def validate_declaration():
    """
    Validate an export customs declaration

    Expects JSON body:
    {
        "document_id": "uuid",
        "declaration": {
            "consignorConsignee": "...",
            "exportPort": "...",
            "goods": [{...}],
            ...
        }
    }

    Returns:
        ValidationReport JSON (errors, warnings, suggestions, customsReady)
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({'error': 'No JSON data provided'}), 400

    if not data.get('declaration'):
        return jsonify({'error': 'declaration required'}), 400

    try:
        payload = ValidateRequest.model_validate(data)
    except ValidationError as e:
        return invalid_declaration(e)

    try:
        logger.info("=" * 60)
        logger.info("🔍 DECLARATION VALIDATION")
        logger.info("=" * 60)

        report = create_validator().validate(payload.declaration)

        logger.info(f"{'✅' if report.customs_ready else '❌'} {status_message(report.overall_status)}")
        logger.info("=" * 60)

        response = report_payload(report)
        response['document_id'] = payload.document_id
        return jsonify(response), 200

    except Exception as e:
        logger.error(f"❌ Validation failed: {e}")
        return jsonify({'error': str(e)}), 500


@bp.route('/autofix', methods=['POST'])
def autofix_declaration():
    """
    Apply one finding's automatic correction to a declaration

    Expects JSON body:
    {
        "declaration": {...},
        "finding": {"field": "goods[0].goodsCode", "autoFix": true, "fixValue": "...", ...},
        "revalidate": true
    }

    Returns:
        JSON with the corrected declaration and, when revalidate is set, a fresh report
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({'error': 'No JSON data provided'}), 400

    if not data.get('declaration') or not data.get('finding'):
        return jsonify({'error': 'declaration and finding required'}), 400

    try:
        payload = AutoFixRequest.model_validate(data)
    except ValidationError as e:
        return invalid_declaration(e)

    try:
        engine = create_validator()
        fixed = engine.apply_auto_fix(payload.declaration, payload.finding)
    except FieldPathError as e:
        logger.warning(f"Auto-fix rejected: {e}")
        return jsonify({'error': str(e)}), 400
    except ValidationError as e:
        return invalid_declaration(e)
    except Exception as e:
        logger.error(f"❌ Auto-fix failed: {e}")
        return jsonify({'error': str(e)}), 500

    response = {
        'declaration': fixed.model_dump(mode='json', by_alias=True),
        'applied': fixed is not payload.declaration,
    }
    if payload.revalidate:
        response['report'] = report_payload(engine.validate(fixed))

    return jsonify(response), 200


@bp.route('/codes', methods=['GET'])
def code_tables():
    """
    Customs code tables for the declaration form

    Returns:
        JSON with transportModes, supervisionModes, currencies, units, countries
    """
    try:
        return jsonify(get_rule_tables().to_dict()), 200
    except Exception as e:
        logger.error(f"❌ Could not load code tables: {e}")
        return jsonify({'error': str(e)}), 500
