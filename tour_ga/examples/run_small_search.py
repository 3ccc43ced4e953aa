from tour_ga.data import SAMPLE_CITIES
from tour_ga.evolutionary import EvolutionConfig, EvolutionarySearch


def main():
    cfg = EvolutionConfig(
        num_cities=len(SAMPLE_CITIES),
        population_size=100,
        mutation_rate=0.02,
        generations=200,
        random_seed=123,
    )
    search = EvolutionarySearch(cfg, SAMPLE_CITIES)

    def show(stats):
        if stats.generation % 20 == 0:
            print(f"gen {stats.generation}: best={stats.best_length:.3f} avg={stats.mean_length:.3f}")

    best = search.run(callback=show)
    print("Optimal Tour:", [(SAMPLE_CITIES[i].x, SAMPLE_CITIES[i].y) for i in best.tour])
    print("Distance:", best.length)


if __name__ == "__main__":
    main()
