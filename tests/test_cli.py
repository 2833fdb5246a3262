import pytest

import run_lob_sim


def test_cli_prints_series_and_tail(capsys):
    run_lob_sim.main(["--steps", "12", "--tail", "3"])
    out = capsys.readouterr().out

    assert "Events simulated  : 12" in out
    assert "Final microprice" in out
    # header + rule + 13 rows + blank + 4 finals + blank + 3 events
    assert len(out.strip().splitlines()) == 2 + 13 + 1 + 4 + 1 + 3


def test_cli_clamps_to_interactive_ranges(capsys):
    run_lob_sim.main(["--steps", "500", "--market-order-size", "99", "--clamp"])
    out = capsys.readouterr().out

    assert "Events simulated  : 120" in out


def test_cli_rejects_invalid_rates():
    with pytest.raises(SystemExit):
        run_lob_sim.main(["--market-rate", "0.9", "--cancel-rate", "0.5"])


def test_build_params_returns_steps_without_touching_args():
    _, args = run_lob_sim.parse_arguments(["--steps", "500", "--seed", "0", "--clamp"])

    params, steps = run_lob_sim.build_params(args)

    assert steps == 120
    assert params.seed == 1
    assert args.steps == 500
    assert args.seed == 0


def test_cli_final_lines_round_ties_up(capsys):
    run_lob_sim.main(["--seed", "1", "--steps", "27", "--tail", "0"])
    out = capsys.readouterr().out

    assert "Final microprice  : 99.9063" in out
    assert "  99.9063" in out
