import json

import pytest

from tour_ga.cli import main


def test_run_sample(capsys):
    main(["run", "--generations", "5", "--population", "12", "--seed", "3", "--log-every", "2"])
    out = capsys.readouterr().out
    assert "Optimal Tour:" in out
    assert "Distance:" in out
    assert "gen 4:" in out


def test_run_random_with_islands_and_baseline(capsys):
    main(
        [
            "run", "--random", "8", "--generations", "6", "--population", "10",
            "--islands", "2", "--migrants", "1", "--migration-interval", "2",
            "--seed", "1", "--baseline", "nearest_neighbor",
        ]
    )
    out = capsys.readouterr().out
    assert "Baseline (nearest_neighbor) distance:" in out


def test_checkpoint_then_resume_and_inspect(tmp_path, capsys):
    ckpt = tmp_path / "state.json"
    base = ["run", "--random", "6", "--population", "10", "--seed", "2", "--checkpoint", str(ckpt)]
    main(base + ["--generations", "4"])
    assert json.loads(ckpt.read_text())["generation"] == 4
    main(base + ["--generations", "4", "--resume"])
    main(["inspect", str(ckpt)])
    out = capsys.readouterr().out
    assert "resuming from" in out
    assert "generation=4" in out
    assert "island 0:" in out


def test_invalid_config_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["run", "--mutation-rate", "2.0", "--generations", "1"])
    assert exc.value.code == 2
    assert "mutation_rate" in capsys.readouterr().err


def test_resume_extends_to_new_generation_target(tmp_path, capsys):
    ckpt = tmp_path / "state.json"
    base = ["run", "--random", "6", "--population", "10", "--seed", "2", "--checkpoint", str(ckpt)]
    main(base + ["--generations", "4"])
    main(base + ["--generations", "10", "--mutation-rate", "0.5", "--resume"])
    state = json.loads(ckpt.read_text())
    assert state["generation"] == 10
    assert state["cfg"]["generations"] == 10
    assert state["cfg"]["mutation_rate"] == 0.5
    assert "evolving for 6 generations" in capsys.readouterr().out


@pytest.mark.parametrize("count", ["0", "1"])
def test_too_few_random_cities_exits(count, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["run", "--random", count, "--generations", "1"])
    assert exc.value.code == 2
    assert "num_cities" in capsys.readouterr().err
