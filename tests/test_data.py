import numpy as np
import pytest

from toy_superposition.data import compute_importance_vector, generate_batch


class TestImportanceVector:
    def test_no_decay_is_all_ones(self):
        np.testing.assert_array_equal(compute_importance_vector(7, 1.0), np.ones(7))

    @pytest.mark.parametrize("decay", [0.0, 0.5, 0.9, 1.3])
    def test_first_feature_has_unit_importance(self, decay):
        assert compute_importance_vector(4, decay)[0] == 1.0

    def test_geometric_decay(self):
        np.testing.assert_allclose(compute_importance_vector(4, 0.5), [1.0, 0.5, 0.25, 0.125])


class TestGenerateBatch:
    def test_shape_and_unit_norm(self, rng):
        batch = generate_batch(8, 32, sparsity=0.7, rng=rng)
        assert batch.shape == (32, 8)
        np.testing.assert_allclose(np.linalg.norm(batch, axis=1), np.ones(32), rtol=1e-12)
        assert np.all(batch >= 0)

    def test_importance_not_applied_without_index_scaling(self, rng):
        batch = generate_batch(6, 50, sparsity=0.0, importance=0.1, rng=rng)
        np.testing.assert_allclose(np.linalg.norm(batch, axis=1), np.ones(50), rtol=1e-12)
        assert np.all(batch > 0)

    def test_index_scaling_suppresses_low_indices(self, rng):
        batch = generate_batch(6, 50, sparsity=0.0, importance=0.5, index_scaling=True, rng=rng)
        np.testing.assert_array_equal(batch[:, 0], np.zeros(50))
        norms = np.linalg.norm(batch, axis=1)
        np.testing.assert_allclose(norms, np.ones(50), rtol=1e-12)

    def test_index_scaling_ignored_at_full_importance(self):
        a = generate_batch(5, 10, 0.5, importance=1.0, index_scaling=True, rng=np.random.default_rng(3))
        b = generate_batch(5, 10, 0.5, rng=np.random.default_rng(3))
        np.testing.assert_array_equal(a, b)

    def test_seeded_generation_is_reproducible(self):
        a = generate_batch(5, 4, 0.5, rng=np.random.default_rng(11))
        b = generate_batch(5, 4, 0.5, rng=np.random.default_rng(11))
        np.testing.assert_array_equal(a, b)

