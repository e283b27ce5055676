import pytest

from splatimport.splat_log import Level, log_error, log_warn, set_log_receiver


@pytest.fixture
def received():
    messages = []
    set_log_receiver(lambda level, message: messages.append((level, message)))
    yield messages
    set_log_receiver(None)


def test_error_is_delivered_with_error_level(received):
    log_error("Unable to parse magic number.")
    assert received == [(Level.ERROR, "Unable to parse magic number.")]


def test_warning_is_delivered_with_warning_level(received):
    log_warn("Unexpected type. Unable to convert.")
    assert received == [(Level.WARNING, "Unexpected type. Unable to convert.")]


def test_messages_arrive_in_order(received):
    log_warn("first")
    log_error("second")
    log_warn("third")
    assert [m for _, m in received] == ["first", "second", "third"]
    assert [lvl for lvl, _ in received] == [Level.WARNING, Level.ERROR, Level.WARNING]


def test_clearing_receiver_drops_messages():
    messages = []
    set_log_receiver(lambda level, message: messages.append(message))
    log_error("kept")
    set_log_receiver(None)
    log_error("dropped")
    log_warn("dropped too")
    assert messages == ["kept"]


def test_replacing_receiver_redirects_messages():
    first, second = [], []
    set_log_receiver(lambda level, message: first.append(message))
    log_warn("a")
    set_log_receiver(lambda level, message: second.append(message))
    log_warn("b")
    set_log_receiver(None)
    assert first == ["a"]
    assert second == ["b"]


def test_delivered_levels_follow_declaration_order(received):
    log_warn("warning")
    log_error("error")
    levels = sorted(lvl for lvl, _ in received)
    assert [lvl.name for lvl in levels] == ["ERROR", "WARNING"]