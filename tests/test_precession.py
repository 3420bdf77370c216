"""Tests for the Precession engine: caching, invalidation and term access."""

import pytest

import precession.core.precession as engine_module
from precession.core.coefficients import COEFFICIENT_TABLES, PrecessionModel, PrecessionTerm
from precession.core.errors import ErrorClass, InvalidArgumentError
from precession.core.precession import (
    Precession,
    PrecessionConfig,
    PrecessionTerms,
    evaluate_polynomial,
)
from precession.core.timescales import JulianEpoch


def _direct(coefficients, t):
    total = 0.0
    for i, c in enumerate(coefficients):
        total += c * t ** i
    return total


# --------------------------------------------------------------------------- #
# Construction and configuration
# --------------------------------------------------------------------------- #

class TestConstruction:

    def test_default_model_is_iau2006(self):
        assert Precession(JulianEpoch.j2000()).model == "iau2006"

    def test_explicit_model_is_normalized(self):
        assert Precession(JulianEpoch.j2000(), "IAU1976").model == "iau1976"

    @pytest.mark.parametrize("epoch", [2451545.0, "2000-01-01", None, (2451545.0, 0.0)])
    def test_non_epoch_rejected(self, epoch):
        with pytest.raises(InvalidArgumentError) as exc_info:
            Precession(epoch)
        assert exc_info.value.error_class is ErrorClass.INVALID_EPOCH

    def test_unknown_model_rejected_at_construction(self):
        with pytest.raises(InvalidArgumentError):
            Precession(JulianEpoch.j2000(), "iau1999")

    def test_config_default_model(self):
        config = PrecessionConfig(default_model="IAU2000")
        assert config.default_model == "iau2000"
        assert Precession(JulianEpoch.j2000(), config=config).model == "iau2000"

    def test_explicit_model_overrides_config(self):
        config = PrecessionConfig(default_model="iau2000")
        assert Precession(JulianEpoch.j2000(), "iau1976", config=config).model == "iau1976"

    def test_invalid_config_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            PrecessionConfig(default_model="iau1999")
        assert exc_info.value.error_class is ErrorClass.INVALID_CONFIG

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("PRECESSION_MODEL", "Iau1976")
        assert PrecessionConfig.from_env().default_model == "iau1976"

    def test_config_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("PRECESSION_MODEL", raising=False)
        assert PrecessionConfig.from_env().default_model == "iau2006"


class TestEpochAndModelAccess:

    def test_epoch_getter_returns_same_object(self, epoch_2050):
        engine = Precession(epoch_2050)
        assert engine.epoch is epoch_2050
        assert engine.get_epoch() is epoch_2050

    def test_set_epoch_rejects_non_epoch(self):
        engine = Precession(JulianEpoch.j2000())
        with pytest.raises(InvalidArgumentError):
            engine.epoch = 2451545.0
        with pytest.raises(InvalidArgumentError):
            engine.set_epoch("J2000")

    @pytest.mark.parametrize("name", ["IAU2006", "iau2006", "Iau2006"])
    def test_model_names_equivalent(self, name):
        engine = Precession(JulianEpoch.j2000(), "iau1976")
        engine.model = name
        assert engine.model == "iau2006"
        assert engine.get_model() == "iau2006"

    def test_model_enum_accepted(self):
        engine = Precession(JulianEpoch.j2000())
        engine.set_model(PrecessionModel.IAU2000)
        assert engine.model == "iau2000"

    @pytest.mark.parametrize("value", ["iau1999", None, 2006])
    def test_set_model_rejects_invalid(self, value):
        engine = Precession(JulianEpoch.j2000(), "iau1976")
        with pytest.raises(InvalidArgumentError):
            engine.set_model(value)
        assert engine.model == "iau1976"


# --------------------------------------------------------------------------- #
# Term cache behaviour
# --------------------------------------------------------------------------- #

class TestCaching:

    def test_second_query_served_from_cache(self, counting_epoch):
        epoch = counting_epoch(0.3)
        engine = Precession(epoch)

        first = engine.get_term("psi")
        calls_after_first = epoch.calls
        second = engine.get_term("psi")

        assert calls_after_first == len(COEFFICIENT_TABLES[PrecessionModel.IAU2006][PrecessionTerm.PSI])
        assert epoch.calls == calls_after_first
        assert second == first
        assert engine.cache_info()['size'] == 1

    def test_set_epoch_invalidates(self, counting_epoch):
        old_epoch = counting_epoch(0.1)
        engine = Precession(old_epoch)
        before = engine.zeta

        new_epoch = counting_epoch(0.2)
        engine.epoch = new_epoch
        assert engine.cache_info()['size'] == 0

        after = engine.zeta
        assert new_epoch.calls > 0
        assert after != before
        assert after == _direct(COEFFICIENT_TABLES[PrecessionModel.IAU2006][PrecessionTerm.ZETA], 0.2)

    def test_set_same_epoch_object_still_resets(self, counting_epoch):
        epoch = counting_epoch(0.1)
        engine = Precession(epoch)
        engine.theta
        engine.set_epoch(epoch)
        calls = epoch.calls
        engine.theta
        assert epoch.calls > calls

    def test_model_change_clears_cache(self, counting_epoch):
        epoch = counting_epoch(0.4)
        engine = Precession(epoch, "iau2006")
        iau2006_psi = engine.psi

        engine.model = "iau1976"
        assert engine.cache_info()['size'] == 0
        calls = epoch.calls
        iau1976_psi = engine.psi

        assert epoch.calls > calls
        assert iau1976_psi != iau2006_psi

    def test_same_model_is_noop(self, counting_epoch):
        epoch = counting_epoch(0.4)
        engine = Precession(epoch, "iau2006")
        value = engine.omega
        chi = engine.get_term("chi")
        size = engine.cache_info()['size']
        calls = epoch.calls

        engine.model = "IAU2006"
        engine.set_model("iau2006")

        assert engine.cache_info()['size'] == size
        assert engine.omega == value
        assert engine.get_term("chi") == chi
        assert epoch.calls == calls


# --------------------------------------------------------------------------- #
# epsilon0
# --------------------------------------------------------------------------- #

class TestEpsilon0:

    def test_equals_constant_term_of_epsilon(self, counting_epoch):
        epoch = counting_epoch(0.7)
        engine = Precession(epoch, "iau2006")
        assert engine.epsilon0 == 84381.406
        assert engine.get_term("epsilon0") == COEFFICIENT_TABLES[PrecessionModel.IAU2006][PrecessionTerm.EPSILON][0]

    def test_never_cached_and_never_evaluated(self, counting_epoch):
        epoch = counting_epoch(0.7)
        engine = Precession(epoch)
        engine.epsilon0
        engine.get_term(PrecessionTerm.EPSILON0)
        assert epoch.calls == 0
        assert engine.cache_info()['size'] == 0
        assert engine.cache_info()['hits'] == engine.cache_info()['misses'] == 0

    def test_tracks_model_change(self):
        engine = Precession(JulianEpoch.j2000(), "iau2006")
        assert engine.epsilon0 == 84381.406
        engine.model = "iau1976"
        assert engine.epsilon0 == 84381.448
        engine.model = "iau2000"
        assert engine.epsilon0 == 84381.448


# --------------------------------------------------------------------------- #
# Term access and evaluation
# --------------------------------------------------------------------------- #

class TestTermAccess:

    @pytest.mark.parametrize("key", ["bogus", "Psi", "epsilon_0", "", None])
    def test_illegal_key(self, key):
        engine = Precession(JulianEpoch.j2000())
        with pytest.raises(InvalidArgumentError, match="illegal key"):
            engine.get_term(key)

    def test_polynomial_evaluation_with_stub(self, counting_epoch, monkeypatch):
        ones = {term: (1.0, 1.0, 1.0) for term in PrecessionTerm if term.is_polynomial}
        monkeypatch.setattr(engine_module, "COEFFICIENT_TABLES", {model: ones for model in PrecessionModel})

        engine = Precession(counting_epoch(2.0))
        assert engine.get_term("P") == 7.0

    def test_evaluate_polynomial_ascending(self, counting_epoch):
        epoch = counting_epoch(2.0)
        assert evaluate_polynomial([1, 1, 1], epoch) == 7.0
        assert evaluate_polynomial([], epoch) == 0.0
        assert epoch.calls == 3

    @pytest.mark.parametrize("model", list(PrecessionModel))
    def test_values_match_direct_evaluation(self, model, counting_epoch):
        t = 0.25
        engine = Precession(counting_epoch(t), model.value)
        for term, coefficients in COEFFICIENT_TABLES[model].items():
            assert engine.get_term(term.value) == _direct(coefficients, t)

    def test_models_give_model_specific_values(self, epoch_2050):
        engine = Precession(epoch_2050)
        values = {}
        for model in PrecessionModel:
            engine.model = model.value
            values[model] = engine.psi
        assert len(set(values.values())) == 3

    def test_values_at_j2000_are_constant_terms(self):
        engine = Precession(JulianEpoch.j2000(), "iau2006")
        assert engine.epsilon == 84381.406
        assert engine.omega == 84381.406
        assert engine.zeta == 2.650545
        assert engine.z == -2.650545
        assert engine.pi == 629546.7936
        assert engine.psi == 0.0

    def test_iau1976_one_century(self):
        engine = Precession(JulianEpoch(2451545.0 + 36525.0), "iau1976")
        assert engine.zeta == pytest.approx(2306.2181 + 0.30188 + 0.017998)
        assert engine.z == pytest.approx(2306.2181 + 1.09468 + 0.018203)
        assert engine.theta == pytest.approx(2004.3109 - 0.42665 - 0.041833)
        assert engine.epsilon == pytest.approx(84381.448 - 46.8150 - 0.00059 + 0.001813)

    def test_named_accessors_delegate(self, epoch_2050):
        engine = Precession(epoch_2050)
        accessors = {
            "P": engine.P, "Q": engine.Q, "eta": engine.eta, "pi": engine.pi,
            "p": engine.p, "epsilon0": engine.epsilon0, "epsilon": engine.epsilon,
            "chi": engine.chi, "omega": engine.omega, "psi": engine.psi,
            "theta": engine.theta, "zeta": engine.zeta, "z": engine.z,
        }
        for name, value in accessors.items():
            assert engine.get_term(name) == value

    def test_general_precession_is_lowercase_p(self, epoch_2050):
        engine = Precession(epoch_2050)
        assert engine.p != engine.P
        assert engine.p == pytest.approx(2514.9, abs=1.0)


class TestSnapshot:

    def test_terms_snapshot(self, epoch_2050):
        engine = Precession(epoch_2050, "iau2000")
        snapshot = engine.terms()
        assert isinstance(snapshot, PrecessionTerms)
        assert snapshot.model == "iau2000"
        assert snapshot.jd_tt == epoch_2050.jd_tt
        assert snapshot.zeta == engine.zeta
        assert snapshot.epsilon0 == 84381.448

    def test_terms_fill_cache(self, epoch_2050):
        engine = Precession(epoch_2050)
        engine.terms()
        # every term except epsilon0
        assert engine.cache_info()['size'] == len(PrecessionTerm) - 1

    def test_to_dict(self, epoch_2050):
        data = Precession(epoch_2050).terms().to_dict()
        assert data['model'] == "iau2006"
        assert data['jd_tt'] == pytest.approx(epoch_2050.jd)
        assert set(term.value for term in PrecessionTerm) <= set(data)
