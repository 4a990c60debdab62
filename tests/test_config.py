import logging

import pytest

from udpmsg.config import Session, parse_port, prompt_session


def scripted(*answers):
    """Fake ``input`` that replays answers and records the prompts."""
    prompts = []
    replies = iter(answers)

    def ask(prompt):
        prompts.append(prompt)
        return next(replies)

    ask.prompts = prompts
    return ask


@pytest.mark.parametrize("text, port", [("5000", 5000), (" 1 ", 1), ("65535", 65535)])
def test_parse_port(text, port):
    assert parse_port(text) == port


@pytest.mark.parametrize("text", ["abc", "", "50.5", "0", "-1", "65536"])
def test_parse_port_rejects(text):
    with pytest.raises(ValueError):
        parse_port(text)


def test_prompts_in_order():
    ask = scripted("Alice", "5000", "5001")
    assert prompt_session(ask=ask) == Session("Alice", 5000, 5001)
    assert ask.prompts == [
        "Your name: ",
        "Port to receive messages on: ",
        "Port to send messages to: ",
    ]


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_name_defaults_to_unknown(name):
    session = prompt_session(ask=scripted(name, "5000", "5001"))
    assert session.username == "Unknown"


def test_name_is_trimmed():
    assert prompt_session(ask=scripted("  Bob ", "5000", "5001")).username == "Bob"


def test_invalid_local_port_stops_before_remote_prompt(caplog):
    ask = scripted("Alice", "abc", "5001")
    with caplog.at_level(logging.ERROR, logger="udpmsg"):
        assert prompt_session(ask=ask) is None
    assert len(ask.prompts) == 2
    assert "Invalid port 'abc'" in caplog.text


def test_invalid_remote_port(caplog):
    with caplog.at_level(logging.ERROR, logger="udpmsg"):
        assert prompt_session(ask=scripted("Alice", "5000", "x")) is None
    assert "Invalid port 'x'" in caplog.text


def test_command_line_values_skip_prompts():
    ask = scripted("5001")
    session = prompt_session(name="Alice", local_port="5000", ask=ask)
    assert session == Session("Alice", 5000, 5001)
    assert ask.prompts == ["Port to send messages to: "]


def test_session_is_read_only():
    session = Session("Alice", 5000, 5001)
    with pytest.raises(AttributeError):
        session.username = "Mallory"
