"""
Benchmark suite measuring Chord lookup path lengths.
"""

import logging
import random
import statistics
from typing import Dict, List, Optional, Tuple

import config
from simulation.simulator import Simulator


class BenchmarkResults:
    """Container for benchmark results."""

    def __init__(self):
        self.hop_counts: List[int] = []
        self.degraded = 0
        self.mismatches = 0
        self.config: Dict = {}

    def add_lookup(self, hop_count: int, degraded: bool = False, correct: bool = True):
        """Record one lookup."""
        self.hop_counts.append(hop_count)
        if degraded:
            self.degraded += 1
        if not correct:
            self.mismatches += 1

    def get_stats(self) -> Dict:
        """Get statistical summary."""
        hops = self.hop_counts
        return {
            'hops': {
                'mean': statistics.mean(hops) if hops else 0,
                'median': statistics.median(hops) if hops else 0,
                'stdev': statistics.stdev(hops) if len(hops) > 1 else 0,
                'p95': self._percentile(hops, 0.95) if hops else 0,
                'p99': self._percentile(hops, 0.99) if hops else 0,
                'max': max(hops) if hops else 0,
            },
            'lookups': len(hops),
            'degraded': self.degraded,
            'mismatches': self.mismatches,
            'config': self.config,
        }

    def _percentile(self, data: List[int], p: float) -> int:
        """Calculate percentile."""
        sorted_data = sorted(data)
        index = int(len(sorted_data) * p)
        return sorted_data[min(index, len(sorted_data) - 1)]


class ChordBenchmark:
    """Lookup benchmark over one ring."""

    def __init__(self, m: int, num_nodes: int, seed: Optional[int] = None):
        """
        Initialize benchmark.

        Args:
            m: Bit size of identifier space
            num_nodes: Number of peers on the ring
            seed: Seed for the random lookup identifiers
        """
        self.m = m
        self.num_nodes = num_nodes
        self.rng = random.Random(seed)
        self.logger = logging.getLogger("Benchmark")

        self.simulator = Simulator(m=m, num_nodes=num_nodes, num_keys=0).setup()

    def benchmark_lookups(self, num_lookups: int = config.BENCHMARK_LOOKUPS) -> BenchmarkResults:
        """
        Look up uniformly random identifiers.

        Args:
            num_lookups: Number of lookups

        Returns:
            BenchmarkResults with hop counts
        """
        self.logger.info(f"Benchmarking lookups ({num_lookups} ops, "
                         f"{self.num_nodes} nodes, m={self.m})")

        protocol = self.simulator.protocol
        results = BenchmarkResults()
        results.config = {
            'm': self.m,
            'nodes': len(protocol.ring),
        }

        for _ in range(num_lookups):
            identifier = self.rng.randrange(protocol.ring_size)
            response = protocol.look_up(identifier)
            expected = protocol.find_responsible_node(identifier)
            results.add_lookup(response.hop_count, response.degraded,
                               response.node_index == expected.get_id())

        return results


def run_benchmarks(configs: Optional[List[Tuple[int, int]]] = None,
                   num_lookups: int = config.BENCHMARK_LOOKUPS,
                   seed: Optional[int] = config.RANDOM_SEED) -> Dict[str, BenchmarkResults]:
    """
    Run lookup benchmarks across ring configurations.

    Args:
        configs: List of (m, num_nodes); defaults to config.BENCHMARK_NODE_COUNTS
            at m = config.M
        num_lookups: Lookups per configuration
        seed: Seed for lookup identifiers

    Returns:
        Dictionary of configuration name -> BenchmarkResults
    """
    if configs is None:
        configs = [(config.M, n) for n in config.BENCHMARK_NODE_COUNTS]

    results = {}
    for m, num_nodes in configs:
        config_name = f"m={m},N={num_nodes}"
        benchmark = ChordBenchmark(m, num_nodes, seed=seed)
        result = benchmark.benchmark_lookups(num_lookups)
        results[config_name] = result

        stats = result.get_stats()
        benchmark.logger.info(
            f"{config_name}: mean hops {stats['hops']['mean']:.2f} "
            f"(p95: {stats['hops']['p95']}, max: {stats['hops']['max']})")

    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=config.LOG_FORMAT)
    results = run_benchmarks()

    print("\n" + "=" * 60)
    print("Benchmark Summary")
    print("=" * 60)

    for name, result in results.items():
        stats = result.get_stats()
        print(f"\n{name}:")
        print(f"  Hops: {stats['hops']['mean']:.2f} ± {stats['hops']['stdev']:.2f}")
        print(f"  Degraded: {stats['degraded']}  Mismatches: {stats['mismatches']}")
