import unittest

import numpy as np

import matprops
from matprops import BoolOrUnknown


def _make_pair():
    dense = matprops.DenseMatrix.from_rows([[1, 2], [0, 0]], dtype="float64")
    csr = matprops.CSRMatrix.from_dense([[0.0, 3.0, 0.0], [4.0, 0.0, 0.0]])
    return dense, csr


class TestTransferProperties(unittest.TestCase):
    def setUp(self):
        self.ctx = matprops.ExecutionContext()

    def test_dense_scenario_sets_sparsity_and_symmetry(self):
        m = matprops.DenseMatrix.from_rows([[1, 2], [0, 0]])
        self.assertEqual(m.sparsity, matprops.SPARSITY_UNKNOWN)
        self.assertIs(m.symmetric, BoolOrUnknown.UNKNOWN)
        before = m.values.tobytes()

        matprops.transfer_properties(m, 0.5, 1, self.ctx)

        self.assertEqual(m.sparsity, 0.5)
        self.assertIs(m.symmetric, BoolOrUnknown.TRUE)
        self.assertEqual(m.values.tobytes(), before)
        self.assertEqual(m.to_numpy().tolist(), [[1, 2], [0, 0]])

    def test_csr_scenario_code_two_is_unknown(self):
        m = matprops.CSRMatrix.from_dense([[0.0, 1.0], [1.0, 0.0]])

        matprops.transfer_properties(m, 0.0, 2, self.ctx)

        self.assertEqual(m.sparsity, 0.0)
        self.assertIs(m.symmetric, BoolOrUnknown.UNKNOWN)

    def test_second_call_fully_replaces_first(self):
        for m in _make_pair():
            with self.subTest(representation=type(m).__name__):
                matprops.transfer_properties(m, 0.3, 0, self.ctx)
                self.assertEqual(m.sparsity, 0.3)
                self.assertIs(m.symmetric, BoolOrUnknown.FALSE)

                matprops.transfer_properties(m, 0.9, 1, self.ctx)
                self.assertEqual(m.sparsity, 0.9)
                self.assertIs(m.symmetric, BoolOrUnknown.TRUE)

    def test_known_values_can_be_reset_to_unknown(self):
        m = matprops.DenseMatrix(2, 2)
        matprops.transfer_properties(m, 0.25, 1, self.ctx)
        matprops.transfer_properties(m, matprops.SPARSITY_UNKNOWN, -1, self.ctx)
        self.assertEqual(m.properties.snapshot(), matprops.DataProperties())

    def test_repeated_call_is_idempotent(self):
        for m in _make_pair():
            with self.subTest(representation=type(m).__name__):
                matprops.transfer_properties(m, 0.75, 0, self.ctx)
                once = m.properties.snapshot()
                matprops.transfer_properties(m, 0.75, 0, self.ctx)
                self.assertEqual(m.properties.snapshot(), once)

    def test_read_back_across_codes(self):
        expected = {0: BoolOrUnknown.FALSE, 1: BoolOrUnknown.TRUE, -1: BoolOrUnknown.UNKNOWN, 7: BoolOrUnknown.UNKNOWN}
        for m in _make_pair():
            for s in (0.0, 0.125, 1.0):
                for code, flag in expected.items():
                    with self.subTest(representation=type(m).__name__, sparsity=s, code=code):
                        matprops.transfer_properties(m, s, code, self.ctx)
                        self.assertEqual(m.sparsity, s)
                        self.assertIs(m.symmetric, flag)

    def test_other_handles_are_untouched(self):
        a = matprops.DenseMatrix.from_rows([[1.0, 0.0], [0.0, 1.0]])
        b = matprops.DenseMatrix.from_rows([[1.0, 0.0], [0.0, 1.0]])
        c = matprops.CSRMatrix.from_dense(a)
        matprops.transfer_properties(b, 0.1, 0, self.ctx)

        matprops.transfer_properties(a, 0.5, 1, self.ctx)

        self.assertEqual(b.sparsity, 0.1)
        self.assertIs(b.symmetric, BoolOrUnknown.FALSE)
        self.assertEqual(c.properties.snapshot(), matprops.DataProperties())

    def test_csr_buffers_unchanged_byte_for_byte(self):
        m = matprops.CSRMatrix.from_dense([[0.0, 2.5, 0.0], [0.0, 0.0, -1.0], [3.0, 0.0, 0.0]])
        values = m.values
        before = (m.values.tobytes(), m.col_idxs.tobytes(), m.row_offsets.tobytes())

        matprops.transfer_properties(m, 1.0 / 3.0, 0, self.ctx)

        self.assertIs(m.values, values)
        self.assertEqual((m.values.tobytes(), m.col_idxs.tobytes(), m.row_offsets.tobytes()), before)

    def test_row_slice_view_keeps_its_own_properties(self):
        parent = matprops.DenseMatrix.from_numpy(np.arange(12, dtype=np.float64).reshape(4, 3))
        view = parent.slice_rows(1, 3)
        self.assertTrue(np.shares_memory(parent.values, view.values))

        matprops.transfer_properties(view, 1.0, 0, self.ctx)

        self.assertEqual(view.sparsity, 1.0)
        self.assertEqual(parent.sparsity, matprops.SPARSITY_UNKNOWN)
        self.assertIs(parent.symmetric, BoolOrUnknown.UNKNOWN)

    def test_non_square_matrix_accepts_true_symmetry(self):
        m = matprops.DenseMatrix(2, 3)
        matprops.transfer_properties(m, 0.0, 1, self.ctx)
        self.assertIs(m.symmetric, BoolOrUnknown.TRUE)

    def test_out_of_range_sparsity_is_stored_as_given(self):
        m = matprops.CSRMatrix.from_dense([[1.0]])
        matprops.transfer_properties(m, 1.5, 1, self.ctx)
        self.assertEqual(m.sparsity, 1.5)

    def test_context_is_optional_and_not_mutated(self):
        ctx = matprops.ExecutionContext(config=matprops.UserConfig(debug=True, num_threads=4))
        config = ctx.config
        m = matprops.DenseMatrix(1, 1)

        matprops.transfer_properties(m, 0.0, 0, ctx)
        matprops.transfer_properties(m, 0.5, 1)

        self.assertIs(ctx.config, config)
        self.assertEqual(m.sparsity, 0.5)

    def test_enum_symmetry_is_accepted_directly(self):
        m = matprops.DenseMatrix(2, 2)
        matprops.transfer_properties(m, 0.5, BoolOrUnknown.FALSE, self.ctx)
        self.assertIs(m.symmetric, BoolOrUnknown.FALSE)


if __name__ == "__main__":
    unittest.main()
