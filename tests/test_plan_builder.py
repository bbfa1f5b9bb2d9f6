import pytest

from core.domain.errors import DuplicatePipe, DuplicateRedirect
from core.domain.models import RedirectDirection
from core.services.plan_builder import build


def test_plain_command():
    plan = build(["ls", "-l", "/tmp"])
    assert plan.exec_args == ["ls", "-l", "/tmp"]
    assert plan.redirect is None
    assert not plan.piped
    assert plan.pipe_target is None
    assert plan.background is False


def test_output_redirect_consumes_next_token():
    plan = build(["echo", "hi", ">", "out.txt"])
    assert plan.exec_args == ["echo", "hi"]
    assert plan.redirect.direction is RedirectDirection.OUT
    assert plan.redirect.path == "out.txt"


def test_input_redirect():
    plan = build(["wc", "<", "in.txt"])
    assert plan.exec_args == ["wc"]
    assert plan.redirect.direction is RedirectDirection.IN
    assert plan.redirect.path == "in.txt"


def test_attached_redirect_path():
    plan = build(["wc", "<in.txt", "-l"])
    assert plan.redirect.path == "in.txt"
    assert plan.exec_args == ["wc", "-l"]


def test_redirect_without_path_is_deferred():
    plan = build(["ls", ">"])
    assert plan.redirect.direction is RedirectDirection.OUT
    assert plan.redirect.path is None


def test_consumed_path_is_not_reinterpreted():
    plan = build(["cat", "<", "&"])
    assert plan.redirect.path == "&"
    assert plan.background is False


def test_pipe_target_and_its_arguments():
    plan = build(["ls", "|", "wc", "-l"])
    assert plan.exec_args == ["ls"]
    assert plan.piped
    assert plan.pipe_target == "wc"
    assert plan.pipe_args == ["-l"]
    assert plan.reader_args() == ["wc", "-l"]


def test_attached_pipe_target():
    plan = build(["ls", "|wc"])
    assert plan.pipe_target == "wc"


def test_pipe_target_missing():
    plan = build(["ls", "|"])
    assert plan.piped
    assert plan.pipe_target is None
    assert plan.reader_args() == []


def test_pipe_target_token_is_not_a_control_token():
    plan = build(["ls", "|", ">"])
    assert plan.pipe_target == ">"
    assert plan.redirect is None


def test_background_flag():
    plan = build(["sleep", "5", "&"])
    assert plan.exec_args == ["sleep", "5"]
    assert plan.background is True


def test_everything_together():
    plan = build(["sort", "<", "in.txt", "|", "uniq", "-c", "&"])
    assert plan.exec_args == ["sort"]
    assert plan.redirect.path == "in.txt"
    assert plan.reader_args() == ["uniq", "-c"]
    assert plan.background is True


def test_duplicate_redirect():
    with pytest.raises(DuplicateRedirect):
        build(["a", "<", "f1", "<", "f2"])


def test_mixed_redirects_are_duplicates():
    with pytest.raises(DuplicateRedirect):
        build(["cat", "<", "in", ">", "out"])


def test_duplicate_pipe():
    with pytest.raises(DuplicatePipe):
        build(["a", "|", "b", "|", "c"])


def test_empty_exec_args_is_not_an_error_here():
    plan = build([">", "out.txt"])
    assert plan.exec_args == []
    assert plan.program is None
