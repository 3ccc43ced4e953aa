import argparse
import json
import time
from pathlib import Path
from typing import List, Tuple

from tour_ga.base import SolveResult
from tour_ga.baseline import METHODS, solve_baseline
from tour_ga.data import Instance, load_instance, random_instance, sample_instance
from tour_ga.island import IslandConfig, IslandModel


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def save_checkpoint(model: IslandModel, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model.to_state(), indent=2))


def load_checkpoint(path: Path, **overrides) -> IslandModel:
    state = json.loads(path.read_text())
    # Run-level settings from the command line win over the saved ones.
    state["cfg"].update(overrides)
    return IslandModel.from_state(state)


def _load_cities(args) -> Instance:
    if args.tsp:
        return load_instance(Path(args.tsp))
    if args.random is not None:
        return random_instance(args.random, seed=args.seed)
    return sample_instance()


def build_model(args) -> Tuple[IslandModel, Instance]:
    checkpoint = Path(args.checkpoint) if args.checkpoint else None
    if args.resume and checkpoint and checkpoint.exists():
        log(f"resuming from {checkpoint}")
        model = load_checkpoint(
            checkpoint,
            generations=args.generations,
            mutation_rate=args.mutation_rate,
            workers=args.workers,
        )
        instance = Instance(name=checkpoint.stem, path=None, cities=model.cities)
        return model, instance
    instance = _load_cities(args)
    log(f"loaded instance {instance.name} with {len(instance.cities)} cities")
    cfg = IslandConfig(
        num_cities=len(instance.cities),
        population_size=args.population,
        mutation_rate=args.mutation_rate,
        generations=args.generations,
        elite_fraction=args.elite_fraction,
        random_seed=args.seed,
        workers=args.workers,
        islands=args.islands,
        migration_interval=args.migration_interval,
        migrants=args.migrants if args.islands > 1 else 0,
    )
    log("starting new model")
    return IslandModel(cfg, instance.cities), instance


def island_insights(model: IslandModel) -> Tuple[str, str]:
    details = []
    for idx, island in enumerate(model.islands):
        best_length = island.lengths[0]
        avg_length = sum(island.lengths) / len(island.lengths)
        details.append(
            f"island {idx}: best_length={best_length:.4f} avg_length={avg_length:.4f} "
            f"best_tour={island.population[0]}"
        )
    best = model.best()
    header = f"generation={model.generation}, global_best_length={best.length:.4f}"
    return header, "\n".join(details)


def _print_island_tops(model: IslandModel) -> None:
    lines: List[str] = []
    for idx, island in enumerate(model.islands):
        stats = island.history[-1]
        lines.append(f"[island {idx}] best={stats.best_length:10.4f} avg={stats.mean_length:10.4f}")
    log(f"gen {model.generation}: " + " | ".join(lines))


def report(result: SolveResult, instance: Instance) -> None:
    print("Optimal Tour:", [(instance.cities[i].x, instance.cities[i].y) for i in result.tour])
    print("Distance:", result.length)
    if result.gap is not None:
        print(f"Gap to known optimum: {result.gap:.2%}")


def run(args) -> None:
    t0 = time.perf_counter()
    model, instance = build_model(args)
    checkpoint = Path(args.checkpoint) if args.checkpoint else None

    def on_generation(m: IslandModel) -> None:
        if args.log_every and m.generation % args.log_every == 0:
            _print_island_tops(m)
            if checkpoint:
                save_checkpoint(m, checkpoint)

    log(f"evolving for {model.cfg.generations - model.generation} generations")
    result = model.run(callback=on_generation)
    if checkpoint:
        save_checkpoint(model, checkpoint)
    log(f"finished in {time.perf_counter() - t0:.2f}s")
    result.optimum = instance.optimum
    report(result, instance)
    if args.baseline:
        ref = solve_baseline(instance.cities, args.baseline)
        print(f"Baseline ({ref.solver_name}) distance: {ref.length}")


def inspect(args) -> None:
    path = Path(args.checkpoint)
    if not path.exists():
        print(f"No checkpoint found at {path}; run `tour-ga run --checkpoint {path}` first.")
        return
    model = load_checkpoint(path)
    header, body = island_insights(model)
    print(header)
    print(body)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic-algorithm TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for a city set")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--tsp", help="TSPLIB file with node coordinates")
    source.add_argument("--random", type=int, metavar="N", help="N uniformly random cities")
    run_parser.add_argument("--population", type=int, default=100)
    run_parser.add_argument("--generations", type=int, default=500)
    run_parser.add_argument("--mutation-rate", type=float, default=0.02)
    run_parser.add_argument("--elite-fraction", type=float, default=0.1)
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--workers", type=int, default=1)
    run_parser.add_argument("--islands", type=int, default=1)
    run_parser.add_argument("--migration-interval", type=int, default=5)
    run_parser.add_argument("--migrants", type=int, default=2)
    run_parser.add_argument("--baseline", choices=METHODS, default=None)
    run_parser.add_argument("--log-every", type=int, default=50)
    run_parser.add_argument("--checkpoint", default=None, help="JSON checkpoint path")
    run_parser.add_argument("--resume", action="store_true")
    run_parser.set_defaults(func=run)

    inspect_parser = subparsers.add_parser("inspect", help="Inspect a saved checkpoint")
    inspect_parser.add_argument("checkpoint")
    inspect_parser.set_defaults(func=inspect)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ValueError as exc:
        # ConfigError and DegenerateTourError are ValueErrors.
        parser.error(str(exc))


if __name__ == "__main__":
    main()
