"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from realstat.core.logging import logger
from realstat.core.mortgage import jeonse_loan, lending_ratios, repayment_schedule
from realstat.core.series import SeriesGenerator, UnknownSeriesError
from realstat.core.simulation import run_simulation
from realstat.core.tax import acquisition_tax, holding_tax, transfer_tax
from realstat.domain.validation import validate_inputs
from realstat.schemas.health import PingResponse
from realstat.schemas.mortgage import JeonseLoanRequest, RegulationRequest, RepaymentRequest
from realstat.schemas.series import SeriesListResponse
from realstat.schemas.simulation import SimulationInput, SimulationResponse, ValidationResponse
from realstat.schemas.tax import AcquisitionTaxRequest, HoldingTaxRequest, TransferTaxRequest

SERIES_EXTENSION = "realstat.series"

api_bp = Blueprint("api", __name__)


def _generator() -> SeriesGenerator:
    return current_app.extensions[SERIES_EXTENSION]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("Rejected %s payload: %d error(s)", request.path, exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(UnknownSeriesError)
def _handle_unknown_series(exc: UnknownSeriesError):
    return jsonify({"detail": exc.message}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    settings = current_app.config["REALSTAT_SETTINGS"]
    response = PingResponse(
        message="pong",
        app=settings.app_name,
        cached_series=_generator().cached(),
    )
    return jsonify(response.model_dump())


@api_bp.get("/series")
def list_series() -> Any:
    return jsonify(SeriesListResponse(series=_generator().names).model_dump())


@api_bp.get("/series/<name>")
def series(name: str) -> Any:
    data = _generator().get(name)
    if isinstance(data, tuple):
        return jsonify([point.model_dump() for point in data])
    return jsonify(data.model_dump())


@api_bp.post("/series/cache/clear")
def clear_series_cache() -> Any:
    _generator().clear_cache()
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/indicators/latest")
def latest_indicators() -> Any:
    return jsonify(_generator().latest_indicators().model_dump())


@api_bp.post("/simulation")
def simulation() -> Any:
    """Run the investment simulation; range problems come back as warnings."""
    payload = SimulationInput.model_validate(_payload())
    settings = current_app.config["REALSTAT_SETTINGS"]
    result, warnings = run_simulation(payload, deposit_yield=settings.deposit_yield)
    response = SimulationResponse(result=result, warnings=warnings)
    return jsonify(response.model_dump())


@api_bp.post("/simulation/validate")
def simulation_validate() -> Any:
    payload = SimulationInput.model_validate(_payload())
    return jsonify(ValidationResponse(warnings=validate_inputs(payload)).model_dump())


@api_bp.post("/mortgage/schedule")
def mortgage_schedule() -> Any:
    payload = RepaymentRequest.model_validate(_payload())
    schedule = repayment_schedule(
        payload.loan_amount,
        payload.interest_rate,
        payload.loan_term,
        payload.repayment_type,
    )
    return jsonify(schedule.model_dump())


@api_bp.post("/mortgage/regulations")
def mortgage_regulations() -> Any:
    payload = RegulationRequest.model_validate(_payload())
    ratios = lending_ratios(
        property_price=payload.property_price,
        annual_income=payload.annual_income,
        loan_amount=payload.loan_amount,
        loan_term=payload.loan_term,
        interest_rate=payload.interest_rate,
        existing_loan_payment=payload.existing_loan_payment,
    )
    return jsonify(ratios.model_dump())


@api_bp.post("/mortgage/jeonse")
def mortgage_jeonse() -> Any:
    payload = JeonseLoanRequest.model_validate(_payload())
    return jsonify(jeonse_loan(payload.deposit, payload.rate).model_dump())


@api_bp.post("/tax/acquisition")
def tax_acquisition() -> Any:
    payload = AcquisitionTaxRequest.model_validate(_payload())
    return jsonify(acquisition_tax(payload).model_dump())


@api_bp.post("/tax/transfer")
def tax_transfer() -> Any:
    payload = TransferTaxRequest.model_validate(_payload())
    return jsonify(transfer_tax(payload).model_dump())


@api_bp.post("/tax/holding")
def tax_holding() -> Any:
    payload = HoldingTaxRequest.model_validate(_payload())
    return jsonify(holding_tax(payload).model_dump())
