"""Property-based tests using Hypothesis for robustness testing."""

import numpy as np
import pytest
from hypothesis import assume, given, settings, strategies as st

from drudefit.algorithms.fit_error import compute_error
from drudefit.algorithms.grid_search import grid_search
from drudefit.config import FitWindow, ParameterGrid
from drudefit.dielectric.models.drude import drude_evaluator
from drudefit.samples import OpticalSampleSet

nk_values = st.floats(min_value=0.0, max_value=20.0, allow_nan=False, allow_infinity=False)
wavelengths = st.floats(min_value=200.0, max_value=2000.0, allow_nan=False, allow_infinity=False)
triples = st.tuples(wavelengths, nk_values, nk_values)


@pytest.mark.property
class TestSampleProperties:
    """Derived sequences of any valid sample set."""

    @given(st.lists(triples, min_size=1, max_size=30))
    def test_index_alignment(self, rows):
        samples = OpticalSampleSet.from_triples(rows)
        lengths = {
            samples.wavelength.size, samples.n.size, samples.k.size,
            samples.omega.size, samples.energy.size, samples.eps1.size, samples.eps2.size,
        }
        assert lengths == {len(rows)}

    @given(st.lists(triples, min_size=1, max_size=30))
    def test_permittivity_recomputation(self, rows):
        samples = OpticalSampleSet.from_triples(rows)
        for i, (_, n, k) in enumerate(rows):
            assert samples.eps1[i] == n * n - k * k
            assert samples.eps2[i] == 2.0 * n * k
        # derivation is idempotent
        again = OpticalSampleSet.from_triples(rows)
        np.testing.assert_array_equal(samples.eps1, again.eps1)
        np.testing.assert_array_equal(samples.eps2, again.eps2)

    @given(st.lists(triples, min_size=1, max_size=30))
    def test_omega_and_energy_positive(self, rows):
        samples = OpticalSampleSet.from_triples(rows)
        assert np.all(samples.omega > 0)
        assert np.all(samples.energy > 0)


@pytest.mark.property
class TestModelProperties:
    """Drude model invariants."""

    @given(
        omega=st.floats(min_value=1e14, max_value=1e16),
        eps_inf=st.floats(min_value=1.0, max_value=20.0),
        omega_p=st.floats(min_value=1e15, max_value=2e16),
    )
    def test_zero_damping_convergence(self, omega, eps_inf, omega_p):
        eps = drude_evaluator(omega, eps_inf, omega_p, 1e-6 * omega)
        lossless = eps_inf - omega_p ** 2 / omega ** 2
        assert eps.real == pytest.approx(lossless, rel=1e-9, abs=1e-9 * omega_p ** 2 / omega ** 2)
        assert eps.imag >= 0

    @given(
        omega=st.floats(min_value=1e14, max_value=1e16),
        gamma=st.floats(min_value=1e11, max_value=1e15),
    )
    def test_loss_is_positive(self, omega, gamma):
        assert drude_evaluator(omega, 4.3, 1.3e16, gamma).imag > 0


@pytest.mark.property
class TestFitProperties:
    """Error metric and search invariants on random data."""

    @settings(max_examples=50, deadline=None)
    @given(st.lists(triples, min_size=2, max_size=20), nk_values, nk_values)
    def test_outside_window_perturbation(self, rows, new_n, new_k):
        samples = OpticalSampleSet.from_triples(rows)
        window = FitWindow(2e15, 4e15)
        outside = ~samples.in_window(window)
        assume(np.any(outside))

        n = np.where(outside, new_n, samples.n)
        k = np.where(outside, new_k, samples.k)
        perturbed = OpticalSampleSet(samples.wavelength, n, k)

        assert compute_error(perturbed, 4.3, 1.3e16, 3e13, window) == \
            compute_error(samples, 4.3, 1.3e16, 3e13, window)

    @settings(max_examples=30, deadline=None)
    @given(st.lists(triples, min_size=1, max_size=10))
    def test_error_non_negative(self, rows):
        samples = OpticalSampleSet.from_triples(rows)
        assert compute_error(samples, 4.3, 1.3e16, 3e13, FitWindow(1e15, 5e15)) >= 0.0

    @settings(max_examples=30, deadline=None)
    @given(st.lists(triples, min_size=1, max_size=10))
    def test_search_returns_grid_minimum(self, rows):
        samples = OpticalSampleSet.from_triples(rows)
        window = FitWindow(1e15, 5e15)
        grid = ParameterGrid(1.2e16, 1.4e16, 1e15, 1e13, 5e13, 2e13)
        result = grid_search(samples, 4.3, window, grid)
        errors = [compute_error(samples, 4.3, wp, g, window) for _, wp, g in grid.candidates()]
        first_min = int(np.argmin(errors))
        _, wp, g = list(grid.candidates())[first_min]
        assert (result.best_omega_p, result.best_gamma) == (wp, g)
        assert result.best_error == errors[first_min]
