import numpy
import pytest
from hsets import (interval, ivector, imatrix, identity, lower, upper,
                   midpoint, width, hull, hull_all, intersection,
                   intersection_is_empty, subset_interior, contains_zero,
                   is_positive, is_negative, certainly_less,
                   certainly_greater, inverse, leading_minors, split,
                   left_u, right_u, left_s, right_s, is_covering,
                   shrink_and_expand)


class TestConstruction:
    def test_decimal_strings_are_enclosed(self):
        tenth = interval('0.1')
        assert width(tenth) > 0
        assert lower(tenth) <= 0.1 <= upper(tenth)

    def test_intervals_pass_through(self):
        x = interval(-1, 2)
        assert interval(x) is x

    def test_vector_and_matrix_shapes(self):
        x = ivector([0.0, '0.1', interval(-1, 1)])
        M = imatrix(numpy.eye(3))
        assert x.shape == (3,) and x.dtype == object
        assert M.shape == (3, 3)
        assert upper(M[1, 1]) == 1.0 and upper(M[0, 1]) == 0.0

    def test_numpy_scalars_are_accepted(self):
        x = ivector(numpy.arange(3))
        assert list(midpoint(x)) == [0.0, 1.0, 2.0]


class TestSetOperations:
    def test_hull(self):
        z = hull(interval(0, 1), interval(2, 3))
        assert lower(z) == 0 and upper(z) == 3

    def test_hull_all_of_vectors(self):
        z = hull_all([ivector([0, 5]), ivector([1, 4]), ivector([-1, 6])])
        assert list(lower(z)) == [-1, 4]
        assert list(upper(z)) == [1, 6]

    def test_intersection(self):
        z = intersection(interval(0, 2), interval(1, 3))
        assert lower(z) == 1 and upper(z) == 2

    def test_empty_intersection_raises(self):
        with pytest.raises(ValueError):
            intersection(interval(0, 1), interval(2, 3))
        assert intersection_is_empty(ivector([interval(0, 1)]),
                                     ivector([interval(2, 3)]))

    def test_subset_interior_is_strict(self):
        assert subset_interior(interval(0, 1), interval(-1, 2))
        assert not subset_interior(interval(0, 1), interval(0, 2))

    def test_signs(self):
        assert contains_zero(ivector([interval(-1, 1), 0]))
        assert is_positive(ivector([interval(1, 2), 3]))
        assert not is_positive(interval(0, 1))
        assert is_negative(interval(-2, -1))
        assert not is_negative(interval(-1, 0))

    def test_overlapping_enclosures_are_undecided(self):
        straddling = interval(-1, 1)
        assert not is_positive(straddling) and not is_negative(straddling)
        assert not certainly_less(straddling, interval(0, 2))
        assert not certainly_greater(interval(0, 2), straddling)
        assert not intersection_is_empty(straddling, interval(0, 2))
        assert not subset_interior(straddling, interval(0, 2))

    def test_ordered_enclosures(self):
        assert certainly_less(interval(-2, -1), interval(0, 1))
        assert certainly_greater(interval(2, 3), 1)
        assert certainly_less(ivector([0, 1]), 2)
        assert not certainly_less(ivector([0, 2]), 2)

    def test_split_covers_the_interval(self):
        pieces = split(interval(-1, 1), 4)
        assert len(pieces) == 4
        assert lower(pieces[0]) <= -1 and upper(pieces[-1]) >= 1
        for first, second in zip(pieces, pieces[1:]):
            assert upper(first) >= lower(second)

    def test_split_of_a_point(self):
        assert len(split(interval(2), 10)) == 1


class TestLinearAlgebra:
    def test_inverse_encloses_the_identity(self):
        M = imatrix([[2, 1, 0], [1, 3, 0], [0, 0, '0.1']])
        product = M.dot(inverse(M))
        assert contains_zero(product - identity(3))
        assert max(width(product).flat) < 1e-12

    def test_inverse_of_singular_matrix(self):
        with pytest.raises(ZeroDivisionError):
            inverse(imatrix([[1, 2], [2, 4]]))

    def test_leading_minors(self):
        M = imatrix([[2, 1, 0], [1, 2, 0], [0, 0, 3]])
        minors = [midpoint(m) for m in leading_minors(M)]
        assert minors == [2.0, 3.0, 9.0]


class TestCovering:
    def test_edges(self):
        N = ivector([interval(-1, 1), interval(-2, 2), 0])
        assert upper(left_u(N)[1]) == -2
        assert lower(right_u(N)[1]) == 2
        assert upper(left_s(N)[0]) == -1
        assert lower(right_s(N)[0]) == 1
        assert upper(N[1]) == 2

    def test_shrink_and_expand(self):
        N = ivector([interval(-1, 1), interval(-1, 1)])
        T = shrink_and_expand(N, 2)
        assert upper(T[0]) == 2 and upper(T[1]) == 0.5

    def test_identity_covers_expanded_box(self):
        N = ivector([interval(-1, 1), interval(-1, 1)])
        T = shrink_and_expand(N, '1.1')
        assert is_covering(N, identity(2), T)
        assert not is_covering(T, identity(2), N)

    def test_hyperbolic_map_covers(self):
        N = ivector([interval(-1, 1), interval(-1, 1)])
        M = imatrix([['0.5', 0], [0, 2]])
        assert is_covering(N, M, N)
        assert not is_covering(N, imatrix([[2, 0], [0, '0.5']]), N)

    def test_shrinking_target_is_not_covered(self):
        N = ivector([interval(-1, 1), interval(-1, 1)])
        assert not is_covering(N, identity(2), shrink_and_expand(N, '0.9'))
        assert not is_covering(N, identity(2), shrink_and_expand(N, 1))

    def test_shrink_and_expand_composition(self):
        N = ivector([interval(-1, 1), interval('-0.5', '0.5')])
        T = shrink_and_expand(shrink_and_expand(N, 2), '0.5')
        assert upper(T[0]) == 1 and lower(T[0]) == -1
        assert upper(T[1]) == 0.5 and lower(T[1]) == -0.5
        once = shrink_and_expand(N, 3)
        assert upper(once[0]) == 3 and lower(once[1]) < -0.16
        back = shrink_and_expand(once, interval(1) / 3)
        assert lower(back[0]) <= -1 <= upper(back[0])
        assert lower(back[1]) <= -0.5 and upper(back[1]) >= 0.5

    def test_degenerate_box_does_not_cover(self):
        N = ivector([interval(-1, 1), 0])
        assert not is_covering(N, identity(2), shrink_and_expand(N, '1.1'))
        flat = ivector([0, interval(-1, 1)])
        assert is_covering(flat, identity(2), shrink_and_expand(
            ivector([interval(-1, 1), interval(-1, 1)]), '1.1'))
