import pytest

from blockfall.matrix import Matrix, MatrixRangeError


def test_new_matrix_is_zero_filled():
    m = Matrix(2, 3)
    assert (m.rows, m.cols) == (2, 3)
    assert m.to_lists() == [[0, 0, 0], [0, 0, 0]]


def test_non_positive_dimensions_give_empty_matrix():
    m = Matrix(0, 5)
    assert (m.rows, m.cols) == (0, 0)
    assert m.to_lists() == []
    assert Matrix(-1, 2) == Matrix(0, 0)


def test_values_fill_row_major_and_extra_values_are_ignored():
    m = Matrix(2, 2, [1, 2, 3, 4, -1])
    assert m.to_lists() == [[1, 2], [3, 4]]
    assert m[1, 0] == 3


def test_too_few_values_raise():
    with pytest.raises(ValueError):
        Matrix(2, 2, [1, 2, 3])


def test_from_rows_round_trip():
    rows = [[1, 0, 5], [7, 8, 9]]
    assert Matrix.from_rows(rows).to_lists() == rows


def test_from_rows_rejects_ragged():
    with pytest.raises(ValueError):
        Matrix.from_rows([[1, 2], [3]])


def test_copy_is_independent():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    c = m.copy()
    c[0, 0] = 9
    assert m[0, 0] == 1
    assert c[0, 0] == 9


def test_clip_returns_region():
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert m.clip(1, 1, 3, 3).to_lists() == [[5, 6], [8, 9]]


def test_clip_outside_raises():
    m = Matrix(3, 3)
    with pytest.raises(MatrixRangeError):
        m.clip(2, 2, 4, 3)
    with pytest.raises(MatrixRangeError):
        m.clip(-1, 0, 1, 1)


def test_clip_with_empty_region_is_empty():
    assert Matrix(3, 3).clip(2, 0, 2, 3) == Matrix(0, 0)


def test_paste_then_clip_round_trip():
    screen = Matrix(4, 4)
    block = Matrix.from_rows([[1, 2], [3, 4]])
    screen.paste(block, 1, 2)
    assert screen.clip(1, 2, 3, 4) == block
    assert screen.sum() == block.sum()


def test_paste_overflow_writes_inside_cells_and_raises():
    screen = Matrix(2, 2)
    block = Matrix.from_rows([[1, 2], [3, 4]])
    with pytest.raises(MatrixRangeError):
        screen.paste(block, 1, 1)
    assert screen.to_lists() == [[0, 0], [0, 1]]


def test_paste_onto_itself_is_a_no_op():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    m.paste(m, 0, 0)
    assert m.to_lists() == [[1, 2], [3, 4]]


def test_add_is_elementwise_and_commutative():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    b = Matrix.from_rows([[10, 20], [30, 40]])
    assert (a + b).to_lists() == [[11, 22], [33, 44]]
    assert a + b == b + a
    assert (a + b).sum() == a.sum() + b.sum()


def test_add_shape_mismatch_raises():
    with pytest.raises(ValueError):
        Matrix(2, 2) + Matrix(2, 3)


def test_scale_multiplies_in_place():
    m = Matrix.from_rows([[1, 0], [2, 3]])
    m.scale(10)
    assert m.to_lists() == [[10, 0], [20, 30]]


def test_to_binary_marks_non_zero_cells():
    m = Matrix.from_rows([[0, 20], [-3, 0]])
    assert m.to_binary().to_lists() == [[0, 1], [1, 0]]
    assert m.to_lists() == [[0, 20], [-3, 0]]


def test_any_greater_than():
    m = Matrix.from_rows([[0, 1], [1, 2]])
    assert m.any_greater_than(1) is True
    assert m.any_greater_than(2) is False


def test_item_access_out_of_range_raises():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    with pytest.raises(IndexError):
        m[2, 0]
    with pytest.raises(IndexError):
        m[0, -1] = 1
    assert m.to_lists() == [[1, 2], [3, 4]]
    assert m[1, 1] == 4


def test_equality_checks_cells():
    assert Matrix.from_rows([[1, 2]]) == Matrix(1, 2, [1, 2])
    assert not Matrix.from_rows([[1, 2]]) == Matrix.from_rows([[2, 1]])


def test_str_format():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    assert str(m) == "Matrix(2,2)\n1 2 \n3 4 \n\n"