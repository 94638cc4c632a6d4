"""Tests for the distance metrics."""

import numpy as np
import pytest

from ahclust.distance import (
    DISTANCES,
    ChebyshevDistance,
    CityBlockDistance,
    DistanceType,
    EuclideanDistance,
    PearsonDistance,
    get_distance,
)
from ahclust.exceptions import ConfigurationError, DegenerateDataError, InvalidShapeError


class TestDistanceMetrics:
    """Test the metric formulas."""

    def setup_method(self):
        self.v1 = np.array([0.0, 0.0])
        self.v2 = np.array([3.0, 4.0])

    def test_euclidean_is_squared(self):
        assert EuclideanDistance().distance(self.v1, self.v2) == pytest.approx(25.0)

    def test_city_block(self):
        assert CityBlockDistance().distance(self.v1, self.v2) == pytest.approx(7.0)

    def test_chebyshev(self):
        assert ChebyshevDistance().distance(self.v1, self.v2) == pytest.approx(4.0)

    @pytest.mark.parametrize(
        "metric", [EuclideanDistance(), CityBlockDistance(), ChebyshevDistance()]
    )
    def test_symmetric_and_zero_on_identity(self, metric):
        a = [1.0, -2.0, 5.5]
        b = [0.5, 3.0, 2.0]

        assert metric(a, b) == pytest.approx(metric(b, a))
        assert metric(a, a) == 0.0

    def test_returns_python_float(self):
        assert isinstance(EuclideanDistance().distance([1, 2], [3, 4]), float)

    def test_length_mismatch(self):
        with pytest.raises(InvalidShapeError):
            CityBlockDistance().distance([1.0, 2.0], [1.0])

    def test_names(self):
        assert EuclideanDistance().name == "Euclidean Distance"
        assert PearsonDistance().name == "Pearson Correlation"


class TestPearsonDistance:
    """Test the correlation distance."""

    def setup_method(self):
        self.metric = PearsonDistance()

    def test_identical_profiles_are_zero(self):
        v = [1.0, 2.0, 3.0]
        result = self.metric.distance(v, v)

        assert result == pytest.approx(0.0, abs=1e-12)
        assert not np.isnan(result)

    def test_scaled_profile_is_zero(self):
        assert self.metric.distance([1, 2, 3], [2, 4, 6]) == pytest.approx(0.0, abs=1e-12)

    def test_anti_correlated_is_two(self):
        assert self.metric.distance([1, 2, 3], [3, 2, 1]) == pytest.approx(2.0)

    def test_uncorrelated_is_one(self):
        assert self.metric.distance([1, 0, -1, 0], [0, 1, 0, -1]) == pytest.approx(1.0)

    def test_requires_two_features(self):
        assert self.metric.min_features == 2
        with pytest.raises(DegenerateDataError):
            self.metric.distance([1.0], [2.0])

    def test_constant_vector_is_rejected(self):
        with pytest.raises(DegenerateDataError):
            self.metric.distance([1.0, 1.0, 1.0], [1.0, 2.0, 3.0])


class TestDistanceRegistry:
    """Test lookup by name."""

    def test_all_types_registered(self):
        assert set(DISTANCES) == {t.value for t in DistanceType}

    def test_get_by_name(self):
        assert isinstance(get_distance("euclidean"), EuclideanDistance)
        assert isinstance(get_distance("CITY_BLOCK"), CityBlockDistance)
        assert isinstance(get_distance(DistanceType.PEARSON), PearsonDistance)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="Unknown distance metric"):
            get_distance("cosine")
