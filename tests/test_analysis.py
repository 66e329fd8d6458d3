import numpy as np
import pytest

from toy_superposition import AnalysisConfig
from toy_superposition.analysis import (
    analyze_representation,
    feature_reconstruction_quality,
    gram_matrix,
    orthogonality_score,
)
from toy_superposition.analysis.features import (
    feature_dimensionality,
    feature_norms,
    feature_table,
    interference,
)
from toy_superposition.analysis.stats import compute_activation_stats, moving_average


class TestRepresentation:
    def test_gram_matrix(self):
        W = np.array([[1.0, 2.0, 0.0], [0.0, 1.0, 1.0]])
        np.testing.assert_allclose(gram_matrix(W), W.T @ W)

    def test_diagonal_gram_is_orthogonal(self):
        W = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
        assert orthogonality_score(gram_matrix(W)) == pytest.approx(1.0, abs=1e-6)

    def test_parallel_features(self):
        G = gram_matrix(np.ones((1, 3)))
        assert orthogonality_score(G) == pytest.approx(np.sqrt(3) / 3, abs=1e-6)

    def test_random_weights_bounded(self, rng):
        for _ in range(10):
            result = analyze_representation(rng.normal(size=(2, 6)))
            assert result.gram_matrix.shape == (6, 6)
            assert 0.0 < result.orthogonality <= 1.0

    def test_model_analysis_is_pure(self, importance_model):
        W = importance_model.weights
        result = importance_model.analyze_representation()
        np.testing.assert_allclose(result.gram_matrix, W.T @ W)
        np.testing.assert_array_equal(importance_model.weights, W)


class TestFeatureQuality:
    def test_perfect_reconstruction(self, rng):
        result = feature_reconstruction_quality(lambda x: x, 6, n_samples=100, sparsity=0.5, rng=rng)
        np.testing.assert_allclose(result.qualities, np.ones(6))
        assert result.counts.sum() == 100 * 3

    def test_zero_reconstruction(self, rng):
        result = feature_reconstruction_quality(
            lambda x: np.zeros_like(x), 4, n_samples=50, sparsity=0.0, rng=rng
        )
        np.testing.assert_array_equal(result.counts, np.full(4, 50))
        assert np.all(result.qualities > 0)
        assert np.all(result.qualities < 1)

    def test_unseen_features_have_zero_quality(self, rng):
        result = feature_reconstruction_quality(lambda x: x, 50, n_samples=1, sparsity=0.98, rng=rng)
        unseen = result.counts == 0
        assert unseen.sum() == 49
        np.testing.assert_array_equal(result.qualities[unseen], np.zeros(49))

    def test_importance_vector_returned(self, rng):
        result = feature_reconstruction_quality(lambda x: x, 3, n_samples=5, importance_decay=0.5, rng=rng)
        np.testing.assert_allclose(result.importance, [1.0, 0.5, 0.25])

    def test_model_quality_leaves_weights(self, importance_model):
        W = importance_model.weights
        result = importance_model.compute_feature_reconstruction_quality(200, 0.5, 0.9)
        assert result.qualities.shape == (5,)
        assert np.all((result.qualities >= 0) & (result.qualities <= 1))
        np.testing.assert_array_equal(importance_model.weights, W)


class TestFeatures:
    def test_orthogonal_features(self):
        W = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        np.testing.assert_allclose(feature_norms(W), [1.0, 1.0, 0.0])
        np.testing.assert_allclose(interference(W), [0.0, 0.0, 0.0])
        np.testing.assert_allclose(feature_dimensionality(W), [1.0, 1.0, 0.0])

    def test_antipodal_pair_shares_dimension(self):
        W = np.array([[1.0, -1.0]])
        np.testing.assert_allclose(feature_dimensionality(W), [0.5, 0.5])
        np.testing.assert_allclose(interference(W), [1.0, 1.0])

    def test_feature_table(self, importance_model):
        table = importance_model.feature_statistics(AnalysisConfig(test_batch_size=50))
        assert list(table.columns) == [
            "norm", "interference", "dimensionality", "importance", "quality", "count",
        ]
        assert len(table) == 5
        assert table.index.name == "feature"

    def test_feature_table_without_quality(self):
        table = feature_table(np.eye(2))
        assert list(table.columns) == ["norm", "interference", "dimensionality"]


class TestStats:
    def test_moving_average(self):
        np.testing.assert_allclose(moving_average([1.0, 2.0, 3.0, 4.0], window=2), [1.0, 1.5, 2.5, 3.5])

    def test_moving_average_empty(self):
        assert len(moving_average([], window=3)) == 0

    def test_model_hidden_activation_stats(self, sparsity_model):
        W = sparsity_model.weights
        stats = sparsity_model.hidden_activation_stats(AnalysisConfig(test_batch_size=40, sparsity=0.5))
        assert stats["total_activations"] == 40 * 2
        assert 0.0 <= stats["sparsity"] <= 1.0
        assert stats["max_activation"] >= 0.0
        np.testing.assert_array_equal(sparsity_model.weights, W)

    def test_activation_stats(self):
        stats = compute_activation_stats(np.array([[0.0, 1.0], [2.0, 0.0]]))
        assert stats["active_count"] == 2
        assert stats["sparsity"] == pytest.approx(0.5)
        assert stats["mean_active"] == pytest.approx(1.5)
        assert stats["max_activation"] == 2.0
