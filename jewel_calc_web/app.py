"""JSON web API for the jewelry calculators.

Each request is calculated from scratch; nothing is stored between calls.
Bodies may be sent as a form or as JSON. Input-driven recalculation
(debouncing keystrokes) is the client's job.
"""

import logging
import os

from flask import Flask, jsonify, request

from jewel_calc.config import (
    DEFAULT_MONTHLY_RATE,
    DEFAULT_WASTAGE_PERCENT,
    METAL_UNIT_GRAMS,
    PRESET_MONTHLY_RATES,
    WASTAGE_PRESETS,
    configure_logging,
)
from jewel_calc.engine import accrue_interest, calculate_metal_price
from jewel_calc.exceptions import ValidationError
from jewel_calc.formatter import (
    interest_email_subject,
    interest_result_to_dict,
    interest_share_text,
    mailto_url,
    metal_email_subject,
    metal_result_to_dict,
    metal_share_text,
    whatsapp_url,
)
from jewel_calc.main import build_interest_request, build_metal_request

configure_logging(os.environ.get("JEWEL_CALC_LOG_LEVEL"))
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.sort_keys = False


def _payload() -> dict:
    """Return request fields from a JSON body or a submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return {k: ("" if v is None else str(v)) for k, v in data.items()}
    return request.form.to_dict()


def _include_steps(form: dict) -> bool:
    return form.get("include_steps", "1").lower() not in ("0", "false", "no")


def _error_response(message: str, kind: str):
    return jsonify({"error": message, "kind": kind}), 400


def _share_block(text: str, subject: str) -> dict:
    return {
        "text": text,
        "whatsapp_url": whatsapp_url(text),
        "mailto_url": mailto_url(subject, text),
    }


@app.get("/api/presets")
def presets():
    return jsonify(
        {
            "monthly_rates": list(PRESET_MONTHLY_RATES),
            "default_monthly_rate": DEFAULT_MONTHLY_RATE,
            "wastage_percent": list(WASTAGE_PRESETS),
            "default_wastage_percent": DEFAULT_WASTAGE_PERCENT,
            "metal_unit_grams": METAL_UNIT_GRAMS,
        }
    )


@app.post("/api/interest")
def interest():
    form = _payload()
    try:
        interest_request = build_interest_request(
            form.get("principal", ""),
            form.get("rate", "").strip() or None,
            form.get("start_date", ""),
            form.get("end_date", "").strip() or None,
            form.get("interest_type", "simple"),
            form.get("notice_charge", "").strip() or None,
        )
    except ValidationError as exc:
        return _error_response(exc.message, exc.kind)

    result = accrue_interest(interest_request)
    if not result:
        return _error_response(result.error, result.error_type)
    text = interest_share_text(result.value, include_steps=_include_steps(form))
    body = interest_result_to_dict(result.value)
    body["share"] = _share_block(text, interest_email_subject())
    return jsonify(body)


@app.post("/api/metal")
def metal():
    form = _payload()
    try:
        metal_request = build_metal_request(
            form.get("metal", "gold"),
            form.get("rate", ""),
            form.get("weight", ""),
            form.get("wastage", "").strip() or None,
            form.get("making_charge", "").strip() or None,
        )
    except ValidationError as exc:
        return _error_response(exc.message, exc.kind)

    result = calculate_metal_price(metal_request)
    if not result:
        return _error_response(result.error, result.error_type)
    text = metal_share_text(result.value, include_steps=_include_steps(form))
    body = metal_result_to_dict(result.value)
    body["share"] = _share_block(text, metal_email_subject())
    return jsonify(body)


if __name__ == "__main__":
    logger.info("Starting jewelry calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
