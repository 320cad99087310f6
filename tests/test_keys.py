import pytest

from rawedit.ui.keys import BACKSPACE, ESCAPE, Key, KeyDecoder, ctrl_key, decode_keys, is_control


@pytest.mark.parametrize("data, key", [
    (b'\x1b[A', Key.ARROW_UP),
    (b'\x1b[B', Key.ARROW_DOWN),
    (b'\x1b[C', Key.ARROW_RIGHT),
    (b'\x1b[D', Key.ARROW_LEFT),
    (b'\x1b[H', Key.HOME),
    (b'\x1b[F', Key.END),
    (b'\x1bOH', Key.HOME),
    (b'\x1bOF', Key.END),
    (b'\x1b[1~', Key.HOME),
    (b'\x1b[7~', Key.HOME),
    (b'\x1b[3~', Key.DELETE),
    (b'\x1b[4~', Key.END),
    (b'\x1b[8~', Key.END),
    (b'\x1b[5~', Key.PAGE_UP),
    (b'\x1b[6~', Key.PAGE_DOWN),
])
def test_escape_sequences(data, key):
    assert decode_keys(data) == [key]


def test_plain_bytes_pass_through():
    assert decode_keys(b'a\r\x7f\x11') == [ord('a'), ord('\r'), BACKSPACE, ctrl_key('q')]


@pytest.mark.parametrize("data", [b'\x1b', b'\x1b[', b'\x1b[5'])
def test_truncated_sequence_is_bare_escape(data):
    assert decode_keys(data) == [ESCAPE]


def test_unknown_sequences_are_bare_escape():
    assert decode_keys(b'\x1b[Z') == [ESCAPE]
    assert decode_keys(b'\x1bOA') == [ESCAPE]
    assert decode_keys(b'\x1b[2~') == [ESCAPE]


def test_digit_sequence_without_tilde_consumes_three_bytes():
    assert decode_keys(b'\x1b[5xa') == [ESCAPE, ord('a')]


def test_keys_after_sequence_are_decoded():
    assert decode_keys(b'\x1b[Cx\x1b[3~') == [Key.ARROW_RIGHT, ord('x'), Key.DELETE]


def test_read_key_retries_on_timeout():
    reads = iter([None, None, ord('z')])
    decoder = KeyDecoder(lambda: next(reads))

    assert decoder.read_key() == ord('z')


def test_ctrl_key_and_control_predicate():
    assert ctrl_key('q') == 17
    assert ctrl_key('s') == 19
    assert is_control(ctrl_key('a'))
    assert is_control(BACKSPACE)
    assert not is_control(ord('a'))
