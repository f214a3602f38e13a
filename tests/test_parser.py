from plugin_runtime.core.parser import normalize_command, parse_line, tokenize_args


def test_normalize_command_adds_slash():
    assert normalize_command("echo") == "/echo"
    assert normalize_command("/echo") == "/echo"
    assert normalize_command("  ") == ""


def test_parse_line_splits_command_and_args():
    assert parse_line("/msg alice hello there") == ("/msg", ["alice", "hello", "there"])
    assert parse_line('/msg alice "hello there"') == ("/msg", ["alice", "hello there"])
    assert parse_line("/quit") == ("/quit", [])


def test_parse_line_plain_text_and_blank():
    assert parse_line("hello /there") == (None, [])
    assert parse_line("") == (None, [])
    assert parse_line(None) == (None, [])
    assert parse_line("/") == (None, [])


def test_tokenize_unbalanced_quote_falls_back():
    assert tokenize_args('say "hi there') == ["say", '"hi', "there"]
