import pytest

from archlab.minishell.ring import RingConfig, UsageError, main, parse_args


def test_parse_args():
    assert parse_args(["5", "65", "1"]) == RingConfig(5, 65, 1)


@pytest.mark.parametrize("argv", [[], ["1"], ["1", "2"], ["1", "2", "3", "4"]])
def test_parse_args_wrong_count(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


def test_parse_args_not_a_number():
    with pytest.raises(ValueError):
        parse_args(["five", "65", "1"])


def test_main_prints_plan(capsys):
    assert main(["5", "65", "1"]) == 0
    assert capsys.readouterr().out == (
        "Se crearán 5 procesos, se enviará el caracter 65 desde proceso 1 \n"
    )


def test_main_usage(capsys):
    assert main(["5"]) == 0
    assert capsys.readouterr().out == "Uso: anillo <n> <c> <s> \n"


def test_main_bad_number(capsys):
    assert main(["x", "1", "2"]) == 1
    assert "invalid argument" in capsys.readouterr().err