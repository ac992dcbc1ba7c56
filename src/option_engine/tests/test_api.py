"""Tests for request parsing and the response-producing handlers."""

import pytest

from option_engine.api import (
    CurveRequest,
    SurfaceRequest,
    greeks_curve,
    parse_pricing_parameters,
    price_surface,
    value_option,
)
from option_engine.enums import CurveType, GreekCalculationMethod, PricingModel
from option_engine.exceptions import (
    ConfigurationError,
    OptionEngineError,
    UnsupportedFeatureError,
    ValidationError,
)
from option_engine.valuation import BinomialParameters, PricingParameters

from option_engine.tests.helpers import BSM_CALL, BSM_PUT, EchoValuator


def _pricing_payload(**extra):
    payload = {
        "spotPrice": 100,
        "strikePrice": 100,
        "timeToMaturity": 1,
        "volatility": 0.2,
        "riskFreeRate": 0.05,
    }
    payload.update(extra)
    return payload


def _curve_payload(**extra):
    payload = _pricing_payload(rangeMin=50, rangeMax=150, steps=100, curveType="gamma")
    payload.update(extra)
    return payload


def _surface_payload(**extra):
    payload = _pricing_payload(spotMin=80, spotMax=120, timeMin=0.1, timeMax=2, model="black-scholes")
    payload.update(extra)
    return payload


class TestParsePricingParameters:
    def test_plain_parameters(self):
        params = parse_pricing_parameters(_pricing_payload())
        assert type(params) is PricingParameters
        assert params.spot_price == 100.0
        assert params.risk_free_rate == 0.05

    def test_tree_depth_gives_binomial_parameters(self):
        params = parse_pricing_parameters(_pricing_payload(steps=100))
        assert isinstance(params, BinomialParameters)
        assert params.steps == 100

    def test_integral_float_depth_accepted(self):
        assert parse_pricing_parameters(_pricing_payload(steps=10.0)).steps == 10

    def test_tree_depth_lookup_disabled(self):
        params = parse_pricing_parameters(_pricing_payload(steps=100), tree_steps_key=None)
        assert type(params) is PricingParameters

    def test_missing_field(self):
        payload = _pricing_payload()
        del payload["volatility"]
        with pytest.raises(ConfigurationError, match="volatility"):
            parse_pricing_parameters(payload)

    @pytest.mark.parametrize("value", ["100", None, True, [100]])
    def test_non_numeric_field(self, value):
        with pytest.raises(ConfigurationError):
            parse_pricing_parameters(_pricing_payload(spotPrice=value))

    def test_fractional_depth(self):
        with pytest.raises(ConfigurationError):
            parse_pricing_parameters(_pricing_payload(steps=2.5))

    def test_body_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            parse_pricing_parameters([100, 100, 1, 0.2, 0.05])

    def test_economically_invalid_values_pass_through(self):
        params = parse_pricing_parameters(_pricing_payload(timeToMaturity=-1))
        assert params.is_degenerate


class TestValueOption:
    def test_black_scholes_response(self):
        out = value_option(_pricing_payload())
        assert set(out) == {"callPrice", "putPrice", "d1", "d2"}
        assert out["callPrice"] == pytest.approx(BSM_CALL, abs=1e-3)
        assert out["putPrice"] == pytest.approx(BSM_PUT, abs=1e-3)

    def test_binomial_response_uses_request_depth(self):
        out = value_option(_pricing_payload(steps=500), model=PricingModel.BINOMIAL)
        assert set(out) == {"callPrice", "putPrice"}
        assert out["callPrice"] == pytest.approx(BSM_CALL, abs=0.01)

    def test_degenerate_request_prices_zero(self):
        out = value_option(_pricing_payload(volatility=0))
        assert out["callPrice"] == 0.0
        assert out["putPrice"] == 0.0

    def test_monte_carlo_without_valuator(self):
        with pytest.raises(UnsupportedFeatureError):
            value_option(_pricing_payload(), model=PricingModel.MONTE_CARLO)

    def test_tree_depth_ignored_by_black_scholes(self):
        out = value_option(_pricing_payload(steps=0), model=PricingModel.BLACK_SCHOLES)
        assert out["callPrice"] == pytest.approx(BSM_CALL, abs=1e-3)
        assert out["putPrice"] == pytest.approx(BSM_PUT, abs=1e-3)

    def test_zero_tree_depth_prices_zero_on_binomial(self):
        out = value_option(_pricing_payload(steps=0), model=PricingModel.BINOMIAL)
        assert out == {"callPrice": 0.0, "putPrice": 0.0}


class TestGreeksCurveHandler:
    def test_request_parsing(self):
        request = CurveRequest.from_mapping(_curve_payload())
        assert type(request.params) is PricingParameters
        assert request.sweep.steps == 100
        assert request.curve_type is CurveType.GAMMA

    def test_response_shape(self):
        out = greeks_curve(_curve_payload())
        assert set(out) == {"xValues", "yValues"}
        assert len(out["xValues"]) == 101
        assert len(out["yValues"]) == 101
        assert out["xValues"][0] == 50.0

    def test_theta_curve_over_time(self):
        out = greeks_curve(_curve_payload(rangeMin=0.1, rangeMax=2, steps=19, curveType="theta"))
        assert len(out["xValues"]) == 20
        assert all(y < 0 for y in out["yValues"])

    def test_numerical_greeks(self):
        analytic = greeks_curve(_curve_payload(curveType="vega", steps=4))
        numerical = greeks_curve(
            _curve_payload(curveType="vega", steps=4),
            greek_calc_method=GreekCalculationMethod.NUMERICAL,
        )
        assert numerical["xValues"] == analytic["xValues"]
        assert numerical["yValues"][2] > analytic["yValues"][2]

    def test_unknown_curve_type(self):
        with pytest.raises(ConfigurationError, match="curveType"):
            greeks_curve(_curve_payload(curveType="delta"))

    def test_missing_steps(self):
        payload = _curve_payload()
        del payload["steps"]
        with pytest.raises(ConfigurationError):
            greeks_curve(payload)

    def test_zero_steps(self):
        with pytest.raises(ValidationError):
            greeks_curve(_curve_payload(steps=0))


class TestPriceSurfaceHandler:
    def test_default_sample_counts(self):
        request = SurfaceRequest.from_mapping(_surface_payload())
        assert request.spot_range.steps == 20
        assert request.time_range.steps == 20
        assert request.model is PricingModel.BLACK_SCHOLES
        assert request.simulations is None

    def test_black_scholes_surface(self):
        out = price_surface(_surface_payload(spotSteps=4, timeSteps=3))
        assert set(out) == {"spotPrices", "times", "callPrices", "putPrices"}
        assert len(out["spotPrices"]) == 5
        assert len(out["times"]) == 4
        assert len(out["callPrices"]) == 5
        assert all(len(row) == 4 for row in out["putPrices"])

    def test_binomial_surface_with_depth(self):
        out = price_surface(
            _surface_payload(model="binomial", steps=20, spotSteps=2, timeSteps=2), max_workers=2
        )
        assert len(out["callPrices"]) == 3
        assert all(price >= 0.0 for row in out["callPrices"] for price in row)

    def test_monte_carlo_without_valuator(self):
        with pytest.raises(UnsupportedFeatureError):
            price_surface(_surface_payload(model="monte-carlo", simulations=10_000))

    def test_monte_carlo_with_external_valuator(self):
        out = price_surface(
            _surface_payload(model="monte-carlo", spotSteps=2, timeSteps=1),
            monte_carlo=lambda simulations: EchoValuator(),
        )
        assert out["callPrices"] == [[80.0, 80.0], [100.0, 100.0], [120.0, 120.0]]

    def test_unknown_model(self):
        with pytest.raises(ConfigurationError):
            price_surface(_surface_payload(model="trinomial"))

    def test_simulations_parsed(self):
        request = SurfaceRequest.from_mapping(_surface_payload(model="monte-carlo", simulations=5000))
        assert request.simulations == 5000

    def test_simulations_reach_monte_carlo_valuator(self):
        requested = []

        def factory(simulations):
            requested.append(simulations)
            return EchoValuator()

        price_surface(
            _surface_payload(model="monte-carlo", simulations=5000, spotSteps=1, timeSteps=1),
            monte_carlo=factory,
        )
        assert requested == [5000]

    def test_simulations_default_to_none(self):
        requested = []

        def factory(simulations):
            requested.append(simulations)
            return EchoValuator()

        price_surface(_surface_payload(model="monte-carlo", spotSteps=1, timeSteps=1), monte_carlo=factory)
        assert requested == [None]

    def test_factory_unused_for_other_models(self):
        requested = []
        price_surface(
            _surface_payload(spotSteps=1, timeSteps=1),
            monte_carlo=lambda simulations: requested.append(simulations),
        )
        assert requested == []

    def test_tree_depth_ignored_by_black_scholes_surface(self):
        out = price_surface(_surface_payload(steps=0, spotSteps=2, timeSteps=1))
        # spot 100, time 2.0: a valid Black-Scholes cell
        assert out["callPrices"][1][1] > 0.0


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc", [ValidationError, ConfigurationError, UnsupportedFeatureError]
    )
    def test_library_errors_share_base(self, exc):
        assert issubclass(exc, OptionEngineError)
