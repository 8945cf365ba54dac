from jzlog.stacktrace import STACK_LENGTH, get_stack_trace


def _inner(max_depth, skip_count):
    return get_stack_trace(max_depth, skip_count)


def _outer(max_depth, skip_count):
    return _inner(max_depth, skip_count)


def test_first_frame_is_caller():
    frames = _outer(10, 0)
    assert frames[0].name == "_inner"
    assert frames[1].name == "_outer"


def test_own_frame_is_excluded():
    names = [f.name for f in _outer(STACK_LENGTH, 0)]
    assert "get_stack_trace" not in names
    assert names[:2] == ["_inner", "_outer"]


def test_max_depth_limits_result():
    assert len(_outer(2, 0)) == 2
    assert [f.name for f in _outer(2, 0)] == ["_inner", "_outer"]


def test_zero_depth_is_empty():
    assert _outer(0, 0) == []


def test_negative_depth_is_empty():
    assert _outer(-5, 0) == []


def test_skip_beyond_stack_is_empty():
    assert _outer(10, 10_000) == []


def test_total_bounded_by_stack_length():
    def recurse(n):
        if n == 0:
            return get_stack_trace(1000, 0)
        return recurse(n - 1)

    frames = recurse(STACK_LENGTH + 10)
    assert len(frames) == STACK_LENGTH - 1
    assert all(f.name == "recurse" for f in frames)


def test_frames_carry_file_and_line():
    frames = _outer(1, 0)
    assert frames[0].filename.endswith("test_stacktrace.py")
    assert frames[0].lineno > 0