"""
Customs Submission Routes
Handles mock customs authority submission of validated declarations
"""
import uuid
import logging
from datetime import datetime, timezone
from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from customs_sim.models.customs import SubmissionResponse, ValidateRequest
from customs_sim.routes.declarations import invalid_declaration, report_payload
from customs_sim.validation import create_validator

logger = logging.getLogger('customsim.customs')

bp = Blueprint('customs', __name__, url_prefix='/api/customs')

@bp.route('/submit', methods=['POST'])
def submit_to_customs():
    """
    Submit customs declaration to authority (MOCKED)

    The declaration is validated again first; it is only accepted when the
    report is customs-ready (no critical findings).

    Expects JSON body:
    {
        "document_id": "uuid",
        "declaration": {...}
    }

    Returns:
        JSON with submission_id and timestamp, or 422 with the blocking report
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
        report = create_validator().validate(payload.declaration)

        if not report.customs_ready:
            logger.warning(
                f"Submission refused for {payload.document_id}: "
                f"{len(report.errors)} blocking error(s)"
            )
            return jsonify({
                'document_id': payload.document_id,
                'status': 'rejected',
                'error': 'Declaration has critical validation errors',
                'report': report_payload(report),
            }), 422

        submission_id = f"CUSTOMS-{datetime.now().strftime('%Y%m%d')}-{str(uuid.uuid4())[:8].upper()}"
        timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

        response = SubmissionResponse(
            document_id=payload.document_id,
            submission_id=submission_id,
            timestamp=timestamp,
            message='Declaration successfully submitted to customs authority (mock)',
        )
        logger.info(f"📨 Submitted {payload.document_id} as {submission_id}")
        return jsonify(response.model_dump()), 200

    except Exception as e:
        logger.error(f"❌ Submission failed: {e}")
        return jsonify({'error': str(e)}), 500
