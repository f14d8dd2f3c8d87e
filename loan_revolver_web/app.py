"""Flask JSON front end for the loan revolver.

Endpoints
---------
``/api/plan``
    ``mode``, ``total_debt``, ``annual_rate`` and ``value`` (payment or number
    of periods). Returns the plan as JSON. ``preview=1`` limits the periods to
    ``PREVIEW_ROWS`` and reports the number of omitted rows in ``truncated``.
``/api/payment``
    ``total_debt``, ``annual_rate`` and ``period_count``. Returns the solved
    level payment.

Parameters are read from the query string, a submitted form or a JSON body.
"""

import logging
import os

from flask import Flask, jsonify, request

from loan_revolver.engine import solve_payment
from loan_revolver.errors import LoanRevolverError
from loan_revolver.main import plan_from_args
from loan_revolver.utils import parse_amount, parse_period_count, parse_rate

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["PREVIEW_ROWS"] = int(os.environ.get("LOAN_REVOLVER_PREVIEW_ROWS", "120"))


def _request_params() -> dict:
    params = dict(request.args)
    params.update(request.form)
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def _plan_for_view(plan_data: dict, preview: bool) -> dict:
    if not preview:
        return plan_data
    limit = app.config["PREVIEW_ROWS"]
    periods = plan_data["periods"]
    if len(periods) > limit:
        plan_data["periods"] = periods[:limit]
        plan_data["truncated"] = len(periods) - limit
    return plan_data


@app.errorhandler(LoanRevolverError)
def handle_loan_error(exc: LoanRevolverError):
    logger.info("Rejected request: %s", exc)
    message = exc.args[0] if exc.args else str(exc)
    return jsonify({"error": exc.kind.value, "message": message}), 400


@app.route("/api/plan", methods=["GET", "POST"])
def plan():
    params = _request_params()
    result = plan_from_args(
        str(params.get("mode", "")),
        str(params.get("total_debt", "")),
        str(params.get("annual_rate", "")),
        str(params.get("value", "")),
    )
    preview = str(params.get("preview", "")) == "1"
    return jsonify(_plan_for_view(result.to_dict(), preview))


@app.route("/api/payment", methods=["GET", "POST"])
def payment():
    params = _request_params()
    total_debt = parse_amount(str(params.get("total_debt", "")), "total_debt", allow_zero=False)
    annual_rate = parse_rate(str(params.get("annual_rate", "")))
    period_count = parse_period_count(str(params.get("period_count", "")))
    return jsonify({"payment": solve_payment(total_debt, annual_rate, period_count)})


if __name__ == "__main__":
    print("Starting Loan Revolver web app...")
    app.run(debug=True)
