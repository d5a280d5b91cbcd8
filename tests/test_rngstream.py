import io

import pytest

from commdetect.rngstream import InvalidSeedError, RngStream, check_seed

DEFAULT = [12345] * 6


@pytest.fixture(autouse=True)
def reset_package_seed():
    RngStream.set_package_seed(DEFAULT)
    yield
    RngStream.set_package_seed(DEFAULT)


def test_first_stream_uses_package_seed():
    g = RngStream("g1")
    assert g.get_state() == tuple(DEFAULT)


def test_one_step_from_default_seed():
    g = RngStream()
    g.rand_u01()
    assert g.get_state() == (12345, 12345, 3023790853, 12345, 12345, 2478282264)


def test_values_in_unit_interval():
    g = RngStream()
    values = [g.rand_u01() for _ in range(1000)]
    assert all(0.0 < u < 1.0 for u in values)
    assert len(set(values)) > 990


def test_increased_precision_in_unit_interval():
    g = RngStream()
    g.increased_precision(True)
    values = [g.rand_u01() for _ in range(500)]
    assert all(0.0 <= u < 1.0 for u in values)


def test_reset_start_stream_repeats():
    g = RngStream()
    first = [g.rand_u01() for _ in range(10)]
    g.reset_start_stream()
    assert [g.rand_u01() for _ in range(10)] == first


def test_reset_start_substream_repeats():
    g = RngStream()
    g.reset_next_substream()
    first = [g.rand_u01() for _ in range(5)]
    g.reset_start_substream()
    assert [g.rand_u01() for _ in range(5)] == first


def test_next_substream_is_jump_of_2_pow_76():
    g = RngStream()
    h = RngStream()
    h.set_seed(DEFAULT)
    g.reset_next_substream()
    h.advance_state(76, 0)
    assert g.get_state() == h.get_state()


def test_next_stream_is_jump_of_2_pow_127():
    g1 = RngStream()
    g2 = RngStream()
    g1.advance_state(127, 0)
    assert g1.get_state() == g2.get_state()


def test_advance_matches_draws():
    g = RngStream()
    h = RngStream()
    h.set_seed(DEFAULT)
    for _ in range(7):
        g.rand_u01()
    h.advance_state(0, 7)
    assert g.get_state() == h.get_state()


def test_advance_forward_then_back():
    g = RngStream()
    start = g.get_state()
    g.advance_state(10, 3)
    assert g.get_state() != start
    g.advance_state(-10, -3)
    assert g.get_state() == start


def test_antithetic_complements():
    g = RngStream()
    plain = [g.rand_u01() for _ in range(20)]
    g.reset_start_stream()
    g.set_antithetic(True)
    anti = [g.rand_u01() for _ in range(20)]
    for u, v in zip(plain, anti):
        assert u + v == pytest.approx(1.0)


def test_rand_int_range():
    g = RngStream()
    values = [g.rand_int(3, 7) for _ in range(500)]
    assert set(values) == {3, 4, 5, 6, 7}


def test_set_seed_resets_state():
    g = RngStream()
    g.set_seed([1, 2, 3, 4, 5, 6])
    assert g.get_state() == (1, 2, 3, 4, 5, 6)


def test_package_seed_applies_to_new_stream():
    RngStream.set_package_seed([9, 8, 7, 6, 5, 4])
    g = RngStream()
    assert g.get_state() == (9, 8, 7, 6, 5, 4)


@pytest.mark.parametrize(
    "seed",
    [
        [4294967087, 1, 1, 1, 1, 1],
        [1, 1, 1, 4294944443, 1, 1],
        [0, 0, 0, 1, 1, 1],
        [1, 1, 1, 0, 0, 0],
        [1, 2, 3],
        [-1, 1, 1, 1, 1, 1],
    ],
)
def test_invalid_seeds(seed):
    with pytest.raises(InvalidSeedError):
        check_seed(seed)
    g = RngStream()
    before = g.get_state()
    with pytest.raises(InvalidSeedError):
        g.set_seed(seed)
    assert g.get_state() == before


def test_invalid_package_seed_keeps_previous():
    with pytest.raises(InvalidSeedError):
        RngStream.set_package_seed([0] * 6)
    assert RngStream().get_state() == tuple(DEFAULT)


def test_format_state():
    g = RngStream("g1")
    assert g.format_state() == (
        "The current state of the Rngstream g1:\n"
        "   Cg = { 12345, 12345, 12345, 12345, 12345, 12345 }\n\n"
    )


def test_write_state_full():
    g = RngStream()
    buf = io.StringIO()
    g.write_state_full(buf)
    text = buf.getvalue()
    assert text.startswith("The RngStream:\n   anti = false\n   incPrec = false\n")
    assert text == g.format_state_full()
    assert text.count("{ 12345, 12345, 12345, 12345, 12345, 12345 }") == 3