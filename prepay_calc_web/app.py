import json
import logging
import os
from decimal import Decimal

from flask import Flask, jsonify, render_template, request

from prepay_calc.comparison import compare
from prepay_calc.data_models import AmortizationMethod, LoanParameters
from prepay_calc.errors import InvalidParameter, PrepayCalcError
from prepay_calc.formatter import chart_series, comparison_to_dict
from prepay_calc.utils import decimal_from_str, parse_date

logging.basicConfig(level=os.environ.get("PREPAY_CALC_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["PAGE_SIZE"] = int(os.environ.get("PREPAY_CALC_PAGE_SIZE", "24"))

# The form collects amounts in ten-thousand units and the term in years.
FORM_AMOUNT_UNIT = Decimal("10000")

DEFAULT_FORM = {
    "loan_amount": "100",
    "loan_term": "30",
    "interest_rate": "3.5",
    "payment_method": AmortizationMethod.EQUAL_PRINCIPAL.value,
    "first_payment_date": "",
    "prepayment_date": "",
    "prepayment_amount": "0",
}

METHOD_LABELS = {
    AmortizationMethod.EQUAL_PRINCIPAL.value: "Equal principal",
    AmortizationMethod.EQUAL_INSTALLMENT.value: "Equal installment",
}


def _optional_date(form, name: str):
    value = (form.get(name) or "").strip()
    return parse_date(value) if value else None


def _int_field(form, name: str, default: str) -> int:
    raw = (form.get(name) or default).strip()
    try:
        return int(raw)
    except ValueError:
        raise InvalidParameter(name, f"must be a whole number; got {raw!r}") from None


def _form_to_parameters(form) -> LoanParameters:
    """Build parameters from the HTML form (ten-thousand units, years)."""
    prepayment = (form.get("prepayment_amount") or "").strip() or "0"
    return LoanParameters(
        principal=decimal_from_str(form.get("loan_amount") or "") * FORM_AMOUNT_UNIT,
        annual_rate=decimal_from_str(form.get("interest_rate") or ""),
        term_months=_int_field(form, "loan_term", "0") * 12,
        method=form.get("payment_method") or AmortizationMethod.EQUAL_PRINCIPAL.value,
        first_period_date=_optional_date(form, "first_payment_date"),
        prepayment_date=_optional_date(form, "prepayment_date"),
        prepayment_amount=decimal_from_str(prepayment) * FORM_AMOUNT_UNIT,
    )


def _json_to_parameters(payload: dict) -> LoanParameters:
    """Build parameters from a JSON body (base units, months)."""
    if not isinstance(payload, dict):
        raise InvalidParameter("body", "expected a JSON object")
    for name in ("principal", "annual_rate", "term_months"):
        if name not in payload:
            raise InvalidParameter(name, "is required")
    term = payload["term_months"]
    if not isinstance(term, int) or isinstance(term, bool):
        raise InvalidParameter("term_months", f"must be an integer; got {term!r}")
    first = payload.get("first_period_date")
    prepayment_date = payload.get("prepayment_date")
    return LoanParameters(
        principal=payload["principal"],
        annual_rate=payload["annual_rate"],
        term_months=term,
        method=payload.get("method", AmortizationMethod.EQUAL_PRINCIPAL.value),
        first_period_date=parse_date(first) if first else None,
        prepayment_date=parse_date(prepayment_date) if prepayment_date else None,
        prepayment_amount=payload.get("prepayment_amount") or 0,
    )


def _page_of(rows, page: int, page_size: int):
    pages = max(1, -(-len(rows) // page_size))
    page = min(max(1, page), pages)
    start = (page - 1) * page_size
    return rows[start : start + page_size], page, pages


@app.route("/", methods=["GET", "POST"])
def index():
    form = dict(DEFAULT_FORM)
    result = None
    error = None
    rows = []
    page, pages = 1, 1
    chart_payload = "null"

    if request.method == "POST":
        form.update({k: v for k, v in request.form.items() if k in DEFAULT_FORM})
        try:
            params = _form_to_parameters(request.form)
            result = compare(params)
            requested = request.form.get("page", "1")
            rows, page, pages = _page_of(
                result.merged,
                int(requested) if requested.isdecimal() else 1,
                app.config["PAGE_SIZE"],
            )
            chart_payload = json.dumps(chart_series(result))
        except PrepayCalcError as exc:
            logger.info("Rejected form input: %s", exc)
            error = str(exc)

    return render_template(
        "index.html",
        form=form,
        methods=METHOD_LABELS,
        result=result,
        rows=rows,
        page=page,
        pages=pages,
        error=error,
        chart_payload=chart_payload,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/compare")
def api_compare():
    payload = request.get_json(silent=True)
    try:
        params = _json_to_parameters(payload)
        result = compare(params)
    except PrepayCalcError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(comparison_to_dict(result))


if __name__ == "__main__":
    print("Starting prepayment calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
