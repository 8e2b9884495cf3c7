"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from goal_tracker.core.advanced import AdvancedProjectionEngine
from goal_tracker.domain.validation import (
    MAX_INFLATION_RATE,
    MAX_RETURN_RATE,
    MAX_YEARS,
    MIN_YEARS,
    FinancialInputError,
)
from goal_tracker.log import get_logger
from goal_tracker.schemas.advanced import (
    AllocationRequest,
    MonteCarloOptions,
    MonteCarloRequest,
    StressTestRequest,
    TaxAdjustedRequest,
)
from goal_tracker.schemas.calculations import (
    BreakEvenRequest,
    CompareScenariosRequest,
    FutureValueRequest,
    InflationImpactRequest,
    RequiredContributionRequest,
)
from goal_tracker.schemas.projection import GoalRequest

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)


def _engine() -> AdvancedProjectionEngine:
    return current_app.extensions["projection_engine"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _calculation(name: str, result: Any):
    if isinstance(result, list):
        body = [item.model_dump(mode="json") for item in result]
    else:
        body = result.model_dump(mode="json")
    return jsonify({"calculation": name, "result": body})


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload path=%s errors=%d", request.path, exc.error_count())
    detail = exc.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(FinancialInputError)
def _handle_financial_input_error(exc: FinancialInputError):
    logger.info("invalid financial inputs path=%s errors=%s", request.path, exc.errors)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.after_request
def _log_response(response):
    logger.info("%s %s -> %s", request.method, request.path, response.status_code)
    return response


# ----------------------------------------------------------------------
# Goal-based projections
# ----------------------------------------------------------------------


@api_bp.post("/goals/projection")
def goal_projection() -> Any:
    """Progress, required contribution and month-by-month series for one goal."""
    payload = GoalRequest.model_validate(_payload())
    result = _engine().basic.calculate_goal_projection(payload.goal, payload.contributions)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/goals/monte-carlo")
def goal_monte_carlo() -> Any:
    payload = MonteCarloRequest.model_validate(_payload())
    settings = current_app.config["SETTINGS"]
    options = payload.options or MonteCarloOptions(iterations=settings.monte_carlo_iterations)
    result = _engine().monte_carlo_simulation(payload.goal, payload.contributions, options)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/goals/stress-test")
def goal_stress_test() -> Any:
    payload = StressTestRequest.model_validate(_payload())
    results = _engine().stress_test(payload.goal, payload.contributions, payload.scenarios or None)
    return jsonify([row.model_dump(mode="json") for row in results])


# ----------------------------------------------------------------------
# Standalone calculators
# ----------------------------------------------------------------------


@api_bp.post("/calculate/required-contribution")
def required_contribution() -> Any:
    params = RequiredContributionRequest.model_validate(_payload())
    return _calculation("required-contribution", _engine().basic.calculate_required_contribution(params))


@api_bp.post("/calculate/future-value")
def future_value() -> Any:
    params = FutureValueRequest.model_validate(_payload())
    return _calculation("future-value", _engine().basic.calculate_future_value(params))


@api_bp.post("/calculate/break-even")
def break_even() -> Any:
    params = BreakEvenRequest.model_validate(_payload())
    return _calculation("break-even", _engine().basic.calculate_break_even(params))


@api_bp.post("/calculate/compare-scenarios")
def compare_scenarios() -> Any:
    params = CompareScenariosRequest.model_validate(_payload())
    return _calculation("compare-scenarios", _engine().basic.compare_scenarios(params.scenarios))


@api_bp.post("/calculate/inflation-impact")
def inflation_impact() -> Any:
    params = InflationImpactRequest.model_validate(_payload())
    return _calculation("inflation-impact", _engine().basic.calculate_inflation_impact(params))


@api_bp.post("/calculate/optimal-allocation")
def optimal_allocation() -> Any:
    params = AllocationRequest.model_validate(_payload())
    return _calculation("optimal-allocation", _engine().calculate_optimal_allocation(params))


@api_bp.post("/calculate/tax-adjusted-returns")
def tax_adjusted_returns() -> Any:
    params = TaxAdjustedRequest.model_validate(_payload())
    return _calculation("tax-adjusted-returns", _engine().calculate_tax_adjusted_returns(params))


@api_bp.get("/calculate/assumptions")
def assumptions() -> Any:
    """Default rates and accepted ranges, so clients can prefill forms."""
    settings = current_app.config["SETTINGS"]
    return jsonify(
        {
            "defaultValues": {
                "inflationRate": settings.default_inflation_rate,
                "returnRate": settings.default_return_rate,
                "taxRate": settings.default_tax_rate,
            },
            "ranges": {
                "inflationRate": {"min": 0, "max": MAX_INFLATION_RATE},
                "returnRate": {"min": 0, "max": MAX_RETURN_RATE},
                "years": {"min": round(MIN_YEARS, 4), "max": MAX_YEARS},
            },
            "monteCarlo": {"iterations": settings.monte_carlo_iterations},
        }
    )
