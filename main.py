"""
Main entry point for the Chord lookup simulator.
"""

import argparse
import logging
import sys

import config
from chord.errors import ChordError
from simulation.simulator import Simulator


def run_simulation(args) -> int:
    """
    Build a ring, look up keys and print the responses.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    log_level = getattr(logging, args.log_level.upper())
    logging.basicConfig(level=log_level, format=config.LOG_FORMAT)

    logger = logging.getLogger("Main")

    simulator = Simulator(m=args.m, num_nodes=args.nodes, num_keys=args.keys)
    try:
        simulator.setup()
    except ChordError as e:
        logger.error(f"Could not build ring: {e}")
        return 1

    if args.show_ring:
        print("Ring:")
        for line in simulator.describe_ring():
            print(f"  {line}")
        print()

    if args.show_fingers:
        for table in simulator.describe_fingers():
            print(table)
        print()

    if args.key:
        try:
            print(simulator.look_up(args.key))
        except KeyError:
            logger.error(f"Unknown key {args.key}")
            return 1
        return 0

    for name, response in simulator.run_lookups().items():
        print(f"{name} ({simulator.key_indexes[name]})")
        print(response)

    mismatched = simulator.verify()
    if mismatched:
        logger.error(f"{len(mismatched)} lookups resolved to the wrong node: {mismatched}")
        return 1
    logger.info(f"All {len(simulator.key_names)} lookups resolved correctly")

    if args.benchmark:
        from evaluation.benchmark import run_benchmarks
        from evaluation.visualize import plot_all_results

        configs = [(args.m, n) for n in config.BENCHMARK_NODE_COUNTS if n <= 2 ** args.m]
        results = run_benchmarks(configs, seed=args.seed)
        plot_all_results(results, output_dir=args.plot_dir)

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Chord DHT Lookup Simulator'
    )

    # Chord parameters
    parser.add_argument('--m', type=int, default=config.M,
                        help=f'Identifier space bits (default: {config.M})')

    # Simulation parameters
    parser.add_argument('--nodes', type=int, default=config.NUM_NODES,
                        help=f'Number of peers (default: {config.NUM_NODES})')
    parser.add_argument('--keys', type=int, default=config.NUM_KEYS,
                        help=f'Number of keys (default: {config.NUM_KEYS})')
    parser.add_argument('--key', type=str, default=None,
                        help='Look up a single key by name')
    parser.add_argument('--seed', type=int, default=config.RANDOM_SEED,
                        help='Seed for benchmark lookup identifiers')

    # Output
    parser.add_argument('--show-ring', action='store_true',
                        help='Print the ring before the lookups')
    parser.add_argument('--show-fingers', action='store_true',
                        help='Print every finger table')
    parser.add_argument('--benchmark', action='store_true',
                        help='Run path-length benchmarks and save plots')
    parser.add_argument('--plot-dir', type=str, default=config.PLOT_DIR,
                        help=f'Directory for benchmark plots (default: {config.PLOT_DIR})')

    # Logging
    parser.add_argument('--log-level', type=str, default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Logging level (default: {config.LOG_LEVEL})')

    args = parser.parse_args()

    settings = config.validate_config(args.m, args.nodes, args.keys)
    if not settings['valid']:
        print(f"Error: need m >= 1 and 1 <= nodes <= 2^m "
              f"(got m={args.m}, nodes={args.nodes}, keys={args.keys})")
        sys.exit(1)

    print("=" * 60)
    print("Chord DHT Lookup Simulator")
    print("=" * 60)
    print(f"Identifier Space: 2^{args.m} = {settings['ring_size']}")
    print(f"Nodes: {args.nodes}  Keys: {args.keys}")
    print(f"Hop Limit: {settings['hop_limit']}")
    print("=" * 60 + "\n")

    sys.exit(run_simulation(args))


if __name__ == "__main__":
    main()
