"""
Tests for the playground catalogue and command line.
"""

import pytest

from playground import DEFAULT_MACHINES_YAML, blank_tape, main, parse_machines_yaml


ALTERNATOR = "DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;"
ALTERNATOR_RESULT = "0_1_0_1_0_1_0_1_0_1_0_1_0_1_0_1_0_1_0_1_"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('TURING_MAX_STEPS', raising=False)
    monkeypatch.delenv('TURING_VERBOSE', raising=False)


def test_default_catalogue():
    machines = parse_machines_yaml(DEFAULT_MACHINES_YAML)
    assert [m['name'] for m in machines] == ['alternator', 'alternator by number']
    assert machines[0]['description'] == ALTERNATOR
    assert machines[1]['description'] == ALTERNATOR
    assert machines[0]['tape'] == blank_tape(40)


def test_catalogue_with_tape():
    machines = parse_machines_yaml("""
machines:
  short:
    description: 'DADCCDCRDA;'
    tape: '_1_1'
""")
    assert machines == [{'name': 'short', 'description': 'DADCCDCRDA;', 'tape': '_1_1'}]


def test_catalogue_requires_a_description():
    with pytest.raises(ValueError):
        parse_machines_yaml("machines:\n  nothing:\n    blank: 3\n")


def test_empty_catalogue():
    assert parse_machines_yaml("") == []


def test_main_run(capsys):
    assert main(['run', ALTERNATOR, '--blank', '40']) == 0
    out = capsys.readouterr().out
    assert ALTERNATOR_RESULT in out
    assert "Tape length: 40" in out
    assert "halted" in out


def test_main_run_with_tape(capsys):
    assert main(['run', 'DADCCDCRDA;', '--tape', '_1_1']) == 0
    assert "_0_0" in capsys.readouterr().out


def test_main_reports_decode_errors(capsys):
    assert main(['run', 'C']) == 1
    assert "orphan C" in capsys.readouterr().err


def test_main_convert(capsys):
    assert main(['convert', 'mnum-to-base7', '31332531173113353111731113322531111731111335317']) == 0
    assert capsys.readouterr().out.strip() == "20221420062002242000620002211420000620000224206"


def test_main_canonical(capsys):
    assert main(['canonical', 'DADDCRDAA;']) == 0
    assert capsys.readouterr().out.strip() == "q1S0S1Rq2;"


def test_main_catalogue_file(tmp_path, capsys):
    path = tmp_path / "machines.yaml"
    path.write_text(DEFAULT_MACHINES_YAML)
    assert main(['catalogue', str(path)]) == 0
    assert capsys.readouterr().out.count(ALTERNATOR_RESULT) == 2


def test_max_steps_from_environment(monkeypatch, capsys):
    monkeypatch.setenv('TURING_MAX_STEPS', '3')
    assert main(['run', 'DADDCCNDA;', '--blank', '3']) == 0
    out = capsys.readouterr().out
    assert "Steps: 3, stopped at max steps" in out
    assert "1__" in out


def test_verbose_from_environment(monkeypatch, capsys):
    monkeypatch.setenv('TURING_VERBOSE', 'yes')
    assert main(['run', ALTERNATOR, '--blank', '2']) == 0
    assert "Step 1: State=q1" in capsys.readouterr().out
